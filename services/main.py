"""
Main script for a full update run - can be used for daily cron jobs
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import config  # noqa: E402
from services.common.logging_utils import setup_logging  # noqa: E402
from services.handler import run_update  # noqa: E402


def main():
    """Scrape and sync once (CLI entry point)"""
    parser = argparse.ArgumentParser(description="Bin collection reminders")
    parser.add_argument(
        "--address",
        type=str,
        default=None,
        help="Address to look up (default: ADDRESS env var)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Scrape and list calendar changes without writing them",
    )
    args = parser.parse_args()

    setup_logging()
    logger = logging.getLogger(__name__)

    address = args.address or config.ADDRESS
    dry_run = args.dry_run or config.DRY_RUN

    print("=" * 60)
    print("Bin Collection Reminders")
    print(f" Address: {address}")
    if dry_run:
        print(" MODE: Dry run (no calendar writes)")
    print("=" * 60)
    logger.info("Update started (dry_run=%s)", dry_run)

    response = run_update(address, dry_run=dry_run)
    body = json.loads(response["body"])
    print(json.dumps(body, indent=2, ensure_ascii=False))

    if response["statusCode"] != 200:
        print(f"\n Failed: {body.get('error')}")
        return 1

    print(f"\n Done: {body['calendarEvents']} calendar event(s) created")
    return 0


if __name__ == "__main__":
    sys.exit(main())
