#!/usr/bin/env python3
"""
Issue a new card for an email directly against the configured database.

Usage:
  python scripts/issue_card.py --email someone@example.com [--count 2]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from creditcard_api.core.logging_config import configure_logging  # noqa: E402
from creditcard_api.db.create_tables import create_all  # noqa: E402
from creditcard_api.services.card_service import CardService, ValidationError  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Issue credit card numbers for an email")
    ap.add_argument("--email", required=True, help="Owner email (created when missing)")
    ap.add_argument("--count", type=int, default=1, help="How many cards to issue (default: 1)")
    args = ap.parse_args(argv)

    if args.count < 1:
        raise SystemExit("--count must be at least 1")

    configure_logging()
    create_all()
    svc = CardService()
    try:
        for _ in range(args.count):
            card = svc.register_and_issue(args.email)
            print(f"OK: card {card.id} issued")
            print(f"  Number: {card.number}")
            print(f"  Person: {card.person_id} ({card.person.email})")
    except ValidationError as exc:
        raise SystemExit(exc.message)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
