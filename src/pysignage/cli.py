"""Command-line interface for resolving signage output from a snapshot file."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from pysignage.config_loader import SignageSnapshot
from pysignage.errors import SignageError
from pysignage.rotation import serialize_entries
from pysignage.signage import ActiveSignageData, SignageService


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve sessions and rotation content for a signage display")
    parser.add_argument("snapshot", type=Path, help="JSON file with players, sessions and content")
    parser.add_argument(
        "--at",
        type=datetime.fromisoformat,
        default=None,
        help="Reference time (ISO format, e.g. 2025-01-06T18:15; offsets are converted to local time); defaults to now",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=30,
        help="Minutes either side of the reference time used to find previous/next sessions",
    )
    parser.add_argument(
        "--min-players",
        type=int,
        default=3,
        help="Minimum number of player cards in the rotation",
    )
    parser.add_argument("--fallback", action="store_true", help="Print only the fallback playlist")
    parser.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _session_payload(data: ActiveSignageData) -> dict[str, Any]:
    def dump(model: Any) -> Any:
        return model.model_dump(mode="json") if model is not None else None

    return {
        "current_session": dump(data.current_session),
        "previous_session": dump(data.previous_session),
        "next_session": dump(data.next_session),
        "current_player": dump(data.current_player),
        "previous_player": dump(data.previous_player),
        "next_player": dump(data.next_player),
        "content": serialize_entries(data.content),
        "fallback_content": serialize_entries(data.fallback_content),
    }


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        snapshot = SignageSnapshot.load(args.snapshot)
    except SignageError as exc:
        raise SystemExit(str(exc)) from exc

    sessions, players, content = snapshot.repositories()
    service = SignageService(
        sessions,
        players,
        content,
        nearby_window_minutes=args.window,
        min_rotation_players=args.min_players,
    )

    if args.fallback:
        payload: Any = serialize_entries(service.get_fallback_content())
    else:
        try:
            payload = _session_payload(service.get_active_signage_data(args.at))
        except SignageError as exc:
            raise SystemExit(str(exc)) from exc

    text = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Signage data written to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    main()
