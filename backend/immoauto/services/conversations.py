"""Buyer/seller conversations about a single listing.

A conversation is keyed by (buyer, seller, listing) and unique per key at
the storage level. Messages are append-only; the only mutation is the
``read`` flag, flipped when the other participant opens the thread.
"""
import logging
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from immoauto.core.config import get_settings
from immoauto.core.errors import ForbiddenError, NotFoundError, ValidationError
from immoauto.models.conversation import Conversation, Message
from immoauto.models.user import User
from immoauto.services.refs import ListingRef, listing_ref, load_listing, ref_columns, ref_filter

logger = logging.getLogger(__name__)


def _find(db: Session, buyer_id: int, seller_id: int, ref: ListingRef) -> Conversation | None:
    return (
        db.query(Conversation)
        .filter(
            Conversation.buyer_id == buyer_id,
            Conversation.seller_id == seller_id,
            ref_filter(Conversation, ref),
        )
        .first()
    )


def _resolve(db: Session, buyer_id: int, seller_id: int, ref: ListingRef) -> Conversation:
    conversation = _find(db, buyer_id, seller_id, ref)
    if conversation is not None:
        return conversation

    conversation = Conversation(buyer_id=buyer_id, seller_id=seller_id, **ref_columns(ref))
    db.add(conversation)
    try:
        db.flush()
    except IntegrityError:
        # Another request created the same thread first; use theirs.
        db.rollback()
        conversation = _find(db, buyer_id, seller_id, ref)
        if conversation is None:
            raise
        return conversation

    logger.info("conversation %s opened by buyer %s with seller %s", conversation.id, buyer_id, seller_id)
    return conversation


def get_or_create(
    db: Session,
    buyer_id: int,
    seller_id: int,
    property_id: int | None,
    vehicle_id: int | None,
    content: str,
) -> tuple[Conversation, Message]:
    """Find or open the thread for (buyer, seller, listing) and post ``content`` as the buyer."""
    if buyer_id == seller_id:
        raise ValidationError("You cannot send a message to yourself")
    if db.get(User, seller_id) is None:
        raise NotFoundError("Seller not found")
    ref = listing_ref(property_id, vehicle_id)
    load_listing(db, ref)

    conversation = _resolve(db, buyer_id, seller_id, ref)
    message = Message(conversation_id=conversation.id, sender_id=buyer_id, content=content)
    conversation.updated_at = datetime.utcnow()
    db.add(message)
    db.commit()
    db.refresh(conversation)
    return conversation, message


def _participant_conversation(db: Session, conversation_id: int, user_id: int) -> Conversation:
    conversation = db.get(Conversation, conversation_id)
    if not conversation:
        raise NotFoundError("Conversation not found")
    if not conversation.has_participant(user_id):
        raise ForbiddenError("You are not a participant in this conversation")
    return conversation


def send(db: Session, conversation_id: int, sender_id: int, content: str) -> Message:
    conversation = _participant_conversation(db, conversation_id, sender_id)
    message = Message(conversation_id=conversation.id, sender_id=sender_id, content=content)
    conversation.updated_at = datetime.utcnow()
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def _mark_read(db: Session, conversation: Conversation, viewer_id: int) -> int:
    updated = (
        db.query(Message)
        .filter(
            Message.conversation_id == conversation.id,
            Message.sender_id != viewer_id,
            Message.read.is_(False),
        )
        .update({Message.read: True}, synchronize_session="fetch")
    )
    db.commit()
    return updated


def mark_read(db: Session, conversation_id: int, viewer_id: int) -> int:
    conversation = _participant_conversation(db, conversation_id, viewer_id)
    return _mark_read(db, conversation, viewer_id)


def open_conversation(db: Session, conversation_id: int, viewer_id: int) -> Conversation:
    """Return the thread with its messages, marking the other side's messages as read."""
    conversation = _participant_conversation(db, conversation_id, viewer_id)
    _mark_read(db, conversation, viewer_id)
    db.refresh(conversation)
    return conversation


def list_for_user(db: Session, user_id: int) -> list[tuple[Conversation, Message | None, int]]:
    conversations = (
        db.query(Conversation)
        .filter(or_(Conversation.buyer_id == user_id, Conversation.seller_id == user_id))
        .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
        .all()
    )
    if not conversations:
        return []

    unread = dict(
        db.query(Message.conversation_id, func.count(Message.id))
        .filter(
            Message.conversation_id.in_([c.id for c in conversations]),
            Message.sender_id != user_id,
            Message.read.is_(False),
        )
        .group_by(Message.conversation_id)
        .all()
    )

    rows = []
    for conversation in conversations:
        last_message = (
            db.query(Message)
            .filter(Message.conversation_id == conversation.id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .first()
        )
        rows.append((conversation, last_message, unread.get(conversation.id, 0)))
    return rows


def unread_count(db: Session, user_id: int) -> int:
    query = (
        db.query(func.count(Message.id))
        .join(Conversation, Message.conversation_id == Conversation.id)
        .filter(Message.read.is_(False), Message.sender_id != user_id)
    )
    if get_settings().UNREAD_COUNT_SCOPE == "participant":
        query = query.filter(or_(Conversation.buyer_id == user_id, Conversation.seller_id == user_id))
    else:
        query = query.filter(Conversation.seller_id == user_id)
    return query.scalar() or 0
