"""Submit a single event with its cover image to the DevEvent API."""
from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from ingest.api_client import post_event

logger = logging.getLogger(__name__)
if os.getenv("DEVEVENT_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def parse_agenda_entry(value: str) -> dict:
    """Turn ``"10:00=Kickoff"`` into ``{"time": "10:00", "desc": "Kickoff"}``."""
    time, sep, desc = value.partition("=")
    if not sep or not time.strip() or not desc.strip():
        raise argparse.ArgumentTypeError(f"agenda entries look like TIME=DESCRIPTION, got {value!r}")
    return {"time": time.strip(), "desc": desc.strip()}


def parse_field(value: str) -> tuple:
    key, sep, field_value = value.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"fields look like KEY=VALUE, got {value!r}")
    return key.strip(), field_value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Submit an event to the DevEvent API")
    parser.add_argument("--title", required=True, help="Event title")
    parser.add_argument("--description", default="", help="Event description")
    parser.add_argument("--image", required=True, help="Path to the cover image")
    parser.add_argument("--tag", action="append", default=[], help="Tag (repeatable)")
    parser.add_argument(
        "--agenda",
        action="append",
        default=[],
        type=parse_agenda_entry,
        help="Agenda entry as TIME=DESCRIPTION (repeatable)",
    )
    parser.add_argument(
        "--field",
        action="append",
        default=[],
        type=parse_field,
        help="Extra KEY=VALUE field stored on the event (repeatable)",
    )
    parser.add_argument("--base-url", default=None, help="API base URL (default: BASE_URL setting)")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    fields = dict(args.field)
    fields.update(
        title=args.title,
        description=args.description,
        tags=args.tag,
        agenda=args.agenda,
    )

    try:
        event = post_event(fields, args.image, base_url=args.base_url)
    except Exception as exc:
        print("❌ Failed to post event:", args.title, exc)
        return 1

    print("✅ Posted:", event.get("title", "<unknown>"), event.get("image", ""))
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
