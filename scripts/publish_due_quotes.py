#!/usr/bin/env python3
"""Publish scheduled quotes whose date has passed.

Run it from cron or any other timer, e.g. every five minutes:

    */5 * * * * cd /srv/gratiday && python scripts/publish_due_quotes.py
"""

import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gratiday.config import get_settings
from gratiday.database import get_database
from gratiday.services.scheduler import publish_due_quotes


def main() -> int:
    logging.basicConfig(level=get_settings().log_level)
    db = get_database()
    try:
        published = publish_due_quotes(db)
    finally:
        db.disconnect()
    for quote in published:
        print(f"Published quote {quote.id_quote}: {quote.texto[:60]}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
