"""Scheduled publication tests."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import insert

from gratiday.entities import Quote
from gratiday.models import frase
from gratiday.services.scheduler import publish_due_quotes


def test_publish_due_quotes(db, ana, hope):
    """Due quotes are published; future ones stay scheduled."""
    past = datetime.now(UTC) - timedelta(minutes=5)
    due_id = db.query(
        insert(frase).values(
            texto="Gratitude is the memory of the heart",
            status="scheduled",
            scheduled_at=past,
            creado_por=ana.id_user,
            categoria_id=hope.id_category,
        )
    ).lastrowid
    future = Quote(
        texto="Tomorrow holds new reasons to be thankful",
        status="scheduled",
        scheduled_at=datetime.now(UTC) + timedelta(days=1),
        creado_por=ana.id_user,
        categoria_id=hope.id_category,
        db=db,
    ).create()

    published = publish_due_quotes(db=db)

    assert [quote.id_quote for quote in published] == [due_id]
    stored = Quote.find_by_id(due_id, db=db)
    assert stored.status == "published"
    assert stored.scheduled_at is None
    assert Quote.find_by_id(future.id_quote, db=db).status == "scheduled"
    assert Quote.find_scheduled(db=db) == []


def test_publish_due_quotes_with_nothing_due(db):
    """Nothing due means nothing published."""
    assert publish_due_quotes(db=db) == []
