# freshmarket/services/notification_service.py
from freshmarket.celery_worker import celery_app
from freshmarket.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Sends customer and staff notifications.
    Uses Celery so request handlers never wait on delivery.
    """

    @staticmethod
    def send_order_confirmation(user_id: str, order_id: int, total: str):
        """
        Order placed: confirmation for the customer.
        """
        send_order_confirmation_task.delay(user_id, order_id, total)

    @staticmethod
    def send_contact_received(message_id: int, email: str, subject: str):
        """
        Contact form stored: forward to the shop inbox.
        """
        send_contact_received_task.delay(message_id, email, subject)


@celery_app.task(name="freshmarket.services.notification_service.send_order_confirmation_task")
def send_order_confirmation_task(user_id: str, order_id: int, total: str):
    """
    Celery task - a real deployment would send an email here.
    For now it only logs.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, total {total}")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="freshmarket.services.notification_service.send_contact_received_task")
def send_contact_received_task(message_id: int, email: str, subject: str):
    logger.info(f"[NOTIFICATION] Contact message {message_id} ({subject}) from {email}")
    return {"message_id": message_id, "status": "sent"}
