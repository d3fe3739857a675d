from sqlalchemy.orm import Session

from freshmarket.data.models.contact_message import ContactMessageModel
from freshmarket.domain.schemas import ContactMessageIn
from freshmarket.repos.contact_repo import ContactRepo
from freshmarket.services.notification_service import NotificationService
from freshmarket.utils.logging import get_logger

logger = get_logger(__name__)


class ContactService:
    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.repo = ContactRepo(db)
        self.notification_service = notification_service or NotificationService()

    def send_message(self, payload: ContactMessageIn) -> ContactMessageModel:
        message = self.repo.create_message(ContactMessageModel(**payload.model_dump()))
        logger.info(f"Stored contact message {message.id} ({message.subject})")

        try:
            self.notification_service.send_contact_received(message.id, message.email, message.subject)
        except Exception as e:
            # wiadomosc jest juz zapisana, brak powiadomienia nie cofa zapisu
            logger.warning(f"Failed to dispatch contact notification {message.id}: {e}")

        return message
