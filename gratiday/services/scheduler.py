"""Publication of scheduled quotes that have come due."""

import logging

from gratiday.database import Database, get_database
from gratiday.entities.quote import Quote

logger = logging.getLogger(__name__)


def publish_due_quotes(db: Database | None = None) -> list[Quote]:
    """Publish every scheduled quote whose date has passed.

    Meant to be called periodically by an external timer (cron, systemd, ...).
    Returns the quotes that were published.
    """
    db = db or get_database()
    due = Quote.find_scheduled(db=db)
    if not due:
        return []

    published = []
    for quote in due:
        quote.publish()
        published.append(quote)
    logger.info(f"Published {len(published)} scheduled quote(s)")
    return published
