"""Assemble the display rotation from session players, filler players and media."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Set, Union

from pysignage.models import ContentItem, ContentType, Player
from pysignage.rotation.selector import RandomPlayerSelector


logger = logging.getLogger(__name__)

# Durations in seconds; -1 tells the client to measure the media itself.
PLAYER_STATS_DURATION = 30
IMAGE_CONTENT_DURATION = 30
VIDEO_CONTENT_DURATION = -1

MIN_ROTATION_PLAYERS = 3

# Synthetic ids are negative and namespaced per stage so they never collide
# with persisted content ids or with each other.
CURRENT_ID_BASE = -1000
NEXT_ID_BASE = -2000
PREVIOUS_ID_BASE = -3000
WEEKEND_WARRIOR_ID_BASE = -4000
RANDOM_ID_BASE = -5000


def entry_duration(content_type: ContentType) -> int:
    if content_type is ContentType.VIDEO:
        return VIDEO_CONTENT_DURATION
    if content_type is ContentType.PLAYER_STATS:
        return PLAYER_STATS_DURATION
    return IMAGE_CONTENT_DURATION


@dataclass(frozen=True)
class MediaEntry:
    """A persisted content item placed in the rotation."""

    item: ContentItem
    order: int

    @property
    def entry_id(self) -> int:
        return self.item.id

    @property
    def title(self) -> str:
        return self.item.title

    @property
    def content_type(self) -> ContentType:
        return self.item.content_type

    @property
    def duration(self) -> int:
        return entry_duration(self.item.content_type)

    @property
    def player_id(self) -> Optional[int]:
        return self.item.player_id

    @property
    def file_path(self) -> Optional[str]:
        return self.item.file_path


@dataclass(frozen=True)
class PlayerCardEntry:
    """A stats card fabricated for a player at request time."""

    player: Player
    entry_id: int
    order: int

    @property
    def title(self) -> str:
        return self.player.full_name

    @property
    def content_type(self) -> ContentType:
        return ContentType.PLAYER_STATS

    @property
    def duration(self) -> int:
        return PLAYER_STATS_DURATION

    @property
    def player_id(self) -> int:
        return self.player.id

    @property
    def file_path(self) -> Optional[str]:
        return self.player.photo_path


RotationEntry = Union[MediaEntry, PlayerCardEntry]


def build_fallback_content(media: Sequence[ContentItem], players: Sequence[Player]) -> List[RotationEntry]:
    """All active media followed by a card for every active player."""

    entries: List[RotationEntry] = [MediaEntry(item=item, order=item.order or 0) for item in media]
    entries.extend(
        PlayerCardEntry(player=player, entry_id=-player.id, order=0)
        for player in players
        if player.is_active
    )
    return entries


def build_rotation(
    *,
    current: Optional[Player],
    next_up: Optional[Player],
    previous: Optional[Player],
    active_players: Sequence[Player],
    media: Sequence[ContentItem],
    selector: RandomPlayerSelector,
    now: Optional[datetime] = None,
    min_players: int = MIN_ROTATION_PLAYERS,
) -> List[RotationEntry]:
    """Build the ordered rotation.

    Session players come first (current, next, previous), then the weekend
    warrior, then random filler until ``min_players`` cards exist, then media
    offset past the player slots. No player appears twice.
    """

    cards: List[PlayerCardEntry] = []
    used: Set[int] = set()

    def add(player: Player, entry_id: int) -> None:
        cards.append(PlayerCardEntry(player=player, entry_id=entry_id, order=len(cards)))
        used.add(player.id)

    if current is not None:
        add(current, CURRENT_ID_BASE - current.id)
    if next_up is not None and next_up.id not in used:
        add(next_up, NEXT_ID_BASE - next_up.id)
    if previous is not None and previous.id not in used:
        add(previous, PREVIOUS_ID_BASE - previous.id)

    flagged = [player for player in active_players if player.is_weekend_warrior]
    if len(flagged) > 1:
        logger.warning(
            "%d players flagged as weekend warrior (%s); first in order wins",
            len(flagged),
            ", ".join(str(player.id) for player in flagged),
        )
    warrior = next((player for player in flagged if player.id not in used), None)
    if warrior is not None:
        add(warrior, WEEKEND_WARRIOR_ID_BASE - warrior.id)

    while len(cards) < min_players:
        available = [player for player in active_players if player.id not in used]
        if not available:
            break
        pick = selector.select(available, now=now)
        if pick is None or pick.id in used:
            break
        add(pick, RANDOM_ID_BASE - pick.id - len(cards))

    slot_offset = len(cards)
    media_entries = [
        MediaEntry(item=item, order=slot_offset + (item.order if item.order is not None else index))
        for index, item in enumerate(media)
    ]

    combined: List[RotationEntry] = [*cards, *media_entries]
    combined.sort(key=lambda entry: entry.order)
    logger.debug(
        "Rotation built: %d player cards, %d media, %d total",
        len(cards),
        len(media_entries),
        len(combined),
    )
    return combined
