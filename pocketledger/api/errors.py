"""Translate domain exceptions into HTTP errors"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException
from sqlalchemy.orm import Session

from pocketledger.domain.exceptions import DomainException, InvalidInputError, NotFoundError
from pocketledger.infrastructure.observability.metrics import record_domain_error


def to_http_error(exc: DomainException, request_id: str) -> HTTPException:
    """
    Map a domain exception to the HTTPException a route should raise.

    InvalidInputError -> 422, NotFoundError -> 404, anything else -> 500.
    """
    if isinstance(exc, NotFoundError):
        record_domain_error("not_found")
        logging.info(f"Not found: {exc}", extra={"request_id": request_id})
        return HTTPException(status_code=404, detail=str(exc))

    if isinstance(exc, InvalidInputError):
        record_domain_error("invalid_input")
        logging.warning(f"Invalid input: {exc}", extra={"request_id": request_id})
        return HTTPException(status_code=422, detail=str(exc))

    logging.error(f"Unhandled domain error: {exc}", extra={"request_id": request_id})
    return HTTPException(status_code=500, detail="Internal server error")


@contextmanager
def committing(db: Session, request_id: str) -> Iterator[None]:
    """
    Commit the writes made inside the block.

    On any failure the session is rolled back. HTTP errors propagate as
    raised; anything else is logged and becomes a 500.
    """
    try:
        yield
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
