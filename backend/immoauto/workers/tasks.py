import logging

from immoauto.core.config import get_settings
from immoauto.core.database import SessionLocal
from immoauto.models.conversation import Message
from immoauto.models.favorite import Favorite
from immoauto.services.email import send_email
from immoauto.workers.celery_app import celery_app

logger = logging.getLogger(__name__)
settings = get_settings()


@celery_app.task
def notify_new_message(message_id: int) -> dict:
    db = SessionLocal()
    try:
        message = db.get(Message, message_id)
        if not message:
            return {"status": "message_not_found", "message_id": message_id}

        conversation = message.conversation
        recipient = conversation.seller if message.sender_id == conversation.buyer_id else conversation.buyer
        prefs = recipient.notification_preference
        if prefs is not None and not prefs.email_on_new_message:
            return {"status": "opted_out", "message_id": message_id}

        listing = conversation.property or conversation.vehicle
        result = send_email(
            recipient.email,
            subject=f"New message about \"{listing.title}\"",
            body=(
                f"{message.sender.name} wrote:\n\n{message.content}\n\n"
                f"Reply at {settings.FRONTEND_URL}/dashboard/messages?conversation={conversation.id}"
            ),
        )
        logger.info("new message %s notification: %s", message_id, result["status"])
        return {"message_id": message_id, **result}
    finally:
        db.close()


@celery_app.task
def notify_new_favorite(favorite_id: int) -> dict:
    db = SessionLocal()
    try:
        favorite = db.get(Favorite, favorite_id)
        if not favorite:
            return {"status": "favorite_not_found", "favorite_id": favorite_id}

        listing = favorite.property or favorite.vehicle
        owner = listing.owner
        if owner.id == favorite.user_id:
            return {"status": "own_listing", "favorite_id": favorite_id}
        prefs = owner.notification_preference
        if prefs is not None and not prefs.email_on_new_favorite:
            return {"status": "opted_out", "favorite_id": favorite_id}

        result = send_email(
            owner.email,
            subject=f"\"{listing.title}\" was added to a favorites list",
            body=f"Someone saved your listing \"{listing.title}\" to their favorites.",
        )
        return {"favorite_id": favorite_id, **result}
    finally:
        db.close()
