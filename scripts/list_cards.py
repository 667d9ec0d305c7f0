#!/usr/bin/env python3
"""
List the cards issued for an email.

Usage:
  python scripts/list_cards.py --email someone@example.com [--json]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from creditcard_api.core.logging_config import configure_logging  # noqa: E402
from creditcard_api.services.card_service import CardService, ValidationError, card_to_dict  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="List cards by owner email")
    ap.add_argument("--email", required=True, help="Owner email")
    ap.add_argument("--json", action="store_true", help="Print the API JSON shape")
    args = ap.parse_args(argv)

    configure_logging()
    svc = CardService()
    try:
        cards = svc.cards_for_email(args.email)
    except ValidationError as exc:
        raise SystemExit(exc.message)

    if args.json:
        print(json.dumps([card_to_dict(card) for card in cards], indent=2))
        return 0
    if not cards:
        if svc.persons.get_by_email(svc.normalize_email(args.email)) is None:
            print(f"{args.email} is not registered")
        else:
            print(f"No cards for {args.email}")
        return 0
    for card in cards:
        print(f"{card.id}\t{card.number}\t{card.person.email}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
