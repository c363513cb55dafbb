import random
from datetime import datetime, timedelta

from pysignage.models import Player
from pysignage.rotation import RandomPlayerSelector

START = datetime(2025, 1, 6, 18, 0)


def _pool(size: int) -> list[Player]:
    return [Player(id=index, first_name=f"P{index}", last_name="Filler") for index in range(1, size + 1)]


def test_no_repeats_until_pool_exhausted():
    pool = _pool(5)
    selector = RandomPlayerSelector(random.Random(7), now=START)

    picks = [selector.select(pool, now=START + timedelta(minutes=i)).id for i in range(5)]

    assert sorted(picks) == [1, 2, 3, 4, 5]


def test_pool_exhaustion_starts_a_new_cycle():
    pool = _pool(3)
    selector = RandomPlayerSelector(random.Random(1), now=START)
    first_cycle = {selector.select(pool, now=START).id for _ in range(3)}
    second_cycle = {selector.select(pool, now=START).id for _ in range(3)}

    assert first_cycle == {1, 2, 3}
    assert second_cycle == {1, 2, 3}


def test_hour_boundary_resets_history():
    pool = _pool(4)
    selector = RandomPlayerSelector(random.Random(3), now=START)
    selector.select(pool, now=START)
    selector.select(pool, now=START)
    assert len(selector.used_ids) == 2

    later = START + timedelta(hours=1, seconds=1)
    selector.select(pool, now=later)

    assert len(selector.used_ids) == 1
    assert selector.last_reset_at == later


def test_exactly_one_hour_does_not_reset():
    pool = _pool(4)
    selector = RandomPlayerSelector(random.Random(3), now=START)
    selector.select(pool, now=START)
    selector.select(pool, now=START + timedelta(hours=1))
    assert len(selector.used_ids) == 2


def test_exclude_is_honoured_when_possible():
    pool = _pool(3)
    selector = RandomPlayerSelector(random.Random(11), now=START)

    for _ in range(10):
        selector.reset(START)
        pick = selector.select(pool, exclude=[pool[0], None], now=START)
        assert pick.id != 1


def test_exclude_is_dropped_before_repeating():
    pool = _pool(3)
    selector = RandomPlayerSelector(random.Random(5), now=START)
    selector.used_ids.update({2, 3})

    pick = selector.select(pool, exclude=[pool[0]], now=START)

    assert pick.id == 1
    assert selector.used_ids == {1, 2, 3}


def test_empty_pool_returns_none():
    selector = RandomPlayerSelector(random.Random(5), now=START)
    assert selector.select([], now=START) is None
