from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import get_current_user
from immoauto.models.user import User
from immoauto.schemas.common import ApiResponse
from immoauto.schemas.message import (
    ConversationCreate,
    ConversationDetail,
    ConversationSummary,
    MessageCreate,
    MessageOut,
    ReadReceipt,
    UnreadCount,
)
from immoauto.services import conversations
from immoauto.services.notifications import queue_new_message_notification

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/conversations", response_model=ApiResponse[list[ConversationSummary]])
def list_conversations(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    rows = conversations.list_for_user(db, current_user.id)
    data = [
        ConversationSummary.model_validate(conversation).model_copy(
            update={
                "last_message": MessageOut.model_validate(last) if last else None,
                "unread_count": unread,
            }
        )
        for conversation, last, unread in rows
    ]
    return {"success": True, "data": data}


@router.post("/conversations", response_model=ApiResponse[ConversationDetail], status_code=201)
def start_conversation(
    payload: ConversationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    conversation, message = conversations.get_or_create(
        db,
        buyer_id=current_user.id,
        seller_id=payload.seller_id,
        property_id=payload.property_id,
        vehicle_id=payload.vehicle_id,
        content=payload.message,
    )
    queue_new_message_notification(message.id)
    return {"success": True, "message": "Message sent", "data": conversation}


@router.get("/conversations/{conversation_id}", response_model=ApiResponse[ConversationDetail])
def get_conversation(conversation_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "data": conversations.open_conversation(db, conversation_id, current_user.id)}


@router.post("/conversations/{conversation_id}/messages", response_model=ApiResponse[MessageOut], status_code=201)
def send_message(
    conversation_id: int,
    payload: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    message = conversations.send(db, conversation_id, current_user.id, payload.content)
    queue_new_message_notification(message.id)
    return {"success": True, "message": "Message sent", "data": message}


@router.post("/conversations/{conversation_id}/read", response_model=ApiResponse[ReadReceipt])
def mark_read(conversation_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    updated = conversations.mark_read(db, conversation_id, current_user.id)
    return {"success": True, "data": {"updated": updated}}


@router.get("/unread", response_model=ApiResponse[UnreadCount])
def unread(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "data": {"count": conversations.unread_count(db, current_user.id)}}
