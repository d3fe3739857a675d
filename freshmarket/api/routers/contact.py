from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freshmarket.data.database import get_db
from freshmarket.domain.schemas import ContactMessageIn, ContactMessageOut
from freshmarket.services.contact_service import ContactService

router = APIRouter(tags=["contact"])


@router.post("/contact", response_model=ContactMessageOut)
def send_contact_message(payload: ContactMessageIn, db: Session = Depends(get_db)):
    message = ContactService(db).send_message(payload)
    return {"message": "Message sent successfully", "id": message.id}
