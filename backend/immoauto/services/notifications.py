import logging

from immoauto.workers.tasks import notify_new_favorite, notify_new_message

logger = logging.getLogger(__name__)


def queue_new_message_notification(message_id: int) -> None:
    # A broker outage must not fail the request that produced the message.
    try:
        notify_new_message.delay(message_id)
    except Exception:
        logger.warning("could not queue notification for message %s", message_id, exc_info=True)


def queue_new_favorite_notification(favorite_id: int) -> None:
    try:
        notify_new_favorite.delay(favorite_id)
    except Exception:
        logger.warning("could not queue notification for favorite %s", favorite_id, exc_info=True)
