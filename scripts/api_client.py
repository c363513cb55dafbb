"""Lightweight REST client for the pysignage API."""

from __future__ import annotations

import argparse
import json

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pysignage REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--at", default=None, help="Reference local time (ISO format)")
    parser.add_argument("--fallback", action="store_true", help="Fetch the fallback playlist only")
    parser.add_argument("--sessions", action="store_true", help="Show active/previous/next sessions")
    parser.add_argument(
        "--notify-content-update",
        action="store_true",
        help="Tell connected displays that media content changed",
    )
    args = parser.parse_args()

    params = {"at": args.at} if args.at else {}

    with httpx.Client(base_url=args.base_url) as client:
        if args.notify_content_update:
            resp = client.post("/signage/content-update")
            resp.raise_for_status()
            print(f"Content update delivered to {resp.json()['delivered']} display(s)")
            return

        if args.sessions:
            for kind in ("previous", "active", "next"):
                resp = client.get(f"/sessions/{kind}", params=params)
                resp.raise_for_status()
                print(f"{kind}:", json.dumps(resp.json(), indent=2))
            return

        if args.fallback:
            resp = client.get("/signage/fallback")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        resp = client.get("/signage/active", params=params)
        if resp.status_code == 404:
            raise SystemExit(resp.json().get("detail", "not found"))
        resp.raise_for_status()
        payload = resp.json()
        current = payload["current_session"]
        print("Current session:", current["id"] if current else None)
        print(f"Received {len(payload['content'])} rotation entries")
        for entry in payload["content"]:
            print(f"  [{entry['order']:>3}] {entry['content_type']:<12} {entry['duration']:>4}s  {entry['title']}")


if __name__ == "__main__":
    main()
