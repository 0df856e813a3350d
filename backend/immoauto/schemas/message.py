from datetime import datetime

from pydantic import Field

from immoauto.schemas.common import CamelModel
from immoauto.schemas.listing import ListingSummary


class ConversationCreate(CamelModel):
    seller_id: int
    property_id: int | None = None
    vehicle_id: int | None = None
    message: str = Field(min_length=1, max_length=5000)


class MessageCreate(CamelModel):
    content: str = Field(min_length=1, max_length=5000)


class MessageOut(CamelModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    read: bool
    created_at: datetime


class Participant(CamelModel):
    id: int
    name: str
    avatar: str | None = None


class ConversationOut(CamelModel):
    id: int
    buyer_id: int
    seller_id: int
    property_id: int | None = None
    vehicle_id: int | None = None
    buyer: Participant
    seller: Participant
    property: ListingSummary | None = None
    vehicle: ListingSummary | None = None
    created_at: datetime
    updated_at: datetime


class ConversationDetail(ConversationOut):
    messages: list[MessageOut]


class ConversationSummary(ConversationOut):
    last_message: MessageOut | None = None
    unread_count: int = 0


class UnreadCount(CamelModel):
    count: int


class ReadReceipt(CamelModel):
    updated: int
