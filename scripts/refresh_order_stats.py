#!/usr/bin/env python3
"""Rebuild the order_stats summary table (orders per day and status).

Run from cron or any external scheduler, e.g. every 15 minutes:
  python3 scripts/refresh_order_stats.py
"""
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ordertrack.config.settings import settings
from ordertrack.crud import reports
from ordertrack.db import SessionLocal
from ordertrack.logging_config import configure_logging

logger = logging.getLogger("refresh_order_stats")


def main():
    configure_logging(settings.LOG_LEVEL)
    with SessionLocal() as db:
        rows = reports.refresh_order_stats(db)
    logger.info("order_stats now holds %d rows", rows)


if __name__ == "__main__":
    main()
