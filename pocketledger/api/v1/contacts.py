"""GET/POST /contacts - People formal loans are made to"""

from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from pocketledger.api.v1.schemas import ContactCreate, ContactSchema, CreatedResponse
from pocketledger.api.dependencies import get_request_id
from pocketledger.api.errors import committing
from pocketledger.infrastructure.database.session import get_db
from pocketledger.infrastructure.database.repositories import ContactRepository
from pocketledger.infrastructure.observability.logging import log_record_change
from pocketledger.infrastructure.observability.metrics import record_created

router = APIRouter()


@router.get("/contacts", response_model=List[ContactSchema])
def list_contacts(db: Session = Depends(get_db)):
    """All contacts, alphabetically"""
    return ContactRepository(db).list_contacts()


@router.post("/contacts", response_model=CreatedResponse)
def create_contact(request_body: ContactCreate, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    with committing(db, request_id):
        contact = ContactRepository(db).create_contact(**request_body.model_dump())

    record_created("contact")
    log_record_change(request_id, "contact", "created", contact.id)
    return CreatedResponse(id=contact.id)
