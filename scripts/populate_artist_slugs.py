#!/usr/bin/env python3
"""Backfill slugs for artists that were created before the slug field existed.

Runs against the CMS when PAYLOAD_URL/PAYLOAD_API_KEY are set, otherwise
against the local JSON store. Safe to re-run: artists that already have
a slug are skipped.

Usage:
    python scripts/populate_artist_slugs.py --store ./data
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from schoerke.content.store import ContentStore
from schoerke.integrations.payload import PayloadAPIClient, PayloadConfig
from schoerke.maintenance.slugs import populate_slugs


def main() -> int:
    parser = argparse.ArgumentParser(description="Populate missing artist slugs")
    parser.add_argument("--store", default="./data", help="Local store directory")
    parser.add_argument("--dry-run", action="store_true", help="Do not write anything")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    payload = PayloadConfig.from_env()
    backend = PayloadAPIClient(payload) if payload.is_configured else ContentStore(Path(args.store))

    report = populate_slugs(backend, "artists", "name", dry_run=args.dry_run)

    print("\n" + "=" * 60)
    print(f"Updated: {len(report.succeeded)}")
    print(f"Skipped: {len(report.skipped)}")
    print(f"Failed:  {len(report.failed)}")
    print("=" * 60)
    for outcome in report.skipped + report.failed:
        print(f"  {outcome.label}: {outcome.message}")
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
