"""Quote API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from gratiday.api.dependencies import DbDep, get_quote_or_404
from gratiday.entities import Quote
from gratiday.schemas.quote import (
    QuoteCreate,
    QuoteFilters,
    QuoteResponse,
    QuoteSchedule,
    QuoteUpdate,
)

router = APIRouter(prefix="/api/v1/quotes", tags=["quotes"])


def _reload(quote: Quote) -> Quote:
    """Re-read a quote so the joined creator and category names are current."""
    return Quote.find_by_id(quote.id_quote, db=quote.db) or quote


def get_quote_filters(
    status: str | None = None,
    categoria_id: int | None = None,
    creado_por: int | None = None,
    search: str | None = None,
) -> QuoteFilters:
    """Collect the optional quote filters from the query string."""
    return QuoteFilters(
        status=status, categoria_id=categoria_id, creado_por=creado_por, search=search
    )


@router.get("", response_model=list[QuoteResponse])
def list_quotes(
    filters: Annotated[QuoteFilters, Depends(get_quote_filters)],
    db: DbDep,
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List quotes matching the filters, newest first."""
    return Quote.find_all(filters, limit, offset, db=db)


@router.post("", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
def create_quote(quote_data: QuoteCreate, db: DbDep):
    """Create a quote, as a draft unless another status is given."""
    quote = Quote(**quote_data.model_dump(), db=db)
    return _reload(quote.create())


@router.get("/count")
def count_quotes(filters: Annotated[QuoteFilters, Depends(get_quote_filters)], db: DbDep):
    """Number of quotes matching the filters."""
    return {"total": Quote.count(filters, db=db)}


@router.get("/published", response_model=list[QuoteResponse])
def list_published(
    db: DbDep,
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """Published quotes, newest first."""
    return Quote.find_published(limit, offset, db=db)


@router.get("/scheduled", response_model=list[QuoteResponse])
def list_due(db: DbDep):
    """Scheduled quotes whose publication date has passed."""
    return Quote.find_scheduled(db=db)


@router.get("/random", response_model=list[QuoteResponse])
def random_quotes(
    db: DbDep,
    count: Annotated[int, Query(ge=1, le=50)] = 1,
    categoria_id: int | None = None,
):
    """Random published quotes."""
    return Quote.find_random(count, categoria_id, db=db)


@router.get("/{quote_id}", response_model=QuoteResponse)
def get_quote(quote: Annotated[Quote, Depends(get_quote_or_404)]):
    """Get a quote with creator and category names."""
    return quote


@router.patch("/{quote_id}", response_model=QuoteResponse)
def update_quote(quote_data: QuoteUpdate, quote: Annotated[Quote, Depends(get_quote_or_404)]):
    """Update a quote."""
    return _reload(quote.update(quote_data))


@router.post("/{quote_id}/publish", response_model=QuoteResponse)
def publish_quote(quote: Annotated[Quote, Depends(get_quote_or_404)]):
    """Publish a quote now."""
    return quote.publish()


@router.post("/{quote_id}/schedule", response_model=QuoteResponse)
def schedule_quote(body: QuoteSchedule, quote: Annotated[Quote, Depends(get_quote_or_404)]):
    """Schedule a quote for a future date."""
    return quote.schedule(body.scheduled_at)


@router.post("/{quote_id}/draft", response_model=QuoteResponse)
def draft_quote(quote: Annotated[Quote, Depends(get_quote_or_404)]):
    """Move a quote back to draft."""
    return quote.draft()


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quote(quote: Annotated[Quote, Depends(get_quote_or_404)]):
    """Delete a quote."""
    quote.delete()
