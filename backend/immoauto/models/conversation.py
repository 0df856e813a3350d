from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from immoauto.core.database import Base


class Conversation(Base):
    __tablename__ = "conversations"
    # One thread per (buyer, seller, listing). Exactly one listing column is set,
    # so each constraint only ever binds on its own listing kind.
    __table_args__ = (
        UniqueConstraint("buyer_id", "seller_id", "property_id", name="uq_conversation_property"),
        UniqueConstraint("buyer_id", "seller_id", "vehicle_id", name="uq_conversation_vehicle"),
        CheckConstraint("buyer_id <> seller_id", name="ck_conversation_distinct_parties"),
        CheckConstraint(
            "(property_id IS NULL) <> (vehicle_id IS NULL)",
            name="ck_conversation_single_listing",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    buyer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    seller_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    property_id: Mapped[int | None] = mapped_column(ForeignKey("properties.id"))
    vehicle_id: Mapped[int | None] = mapped_column(ForeignKey("vehicles.id"))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    buyer = relationship("User", foreign_keys=[buyer_id], back_populates="buyer_conversations")
    seller = relationship("User", foreign_keys=[seller_id], back_populates="seller_conversations")
    property = relationship("Property", back_populates="conversations")
    vehicle = relationship("Vehicle", back_populates="conversations")
    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by=lambda: [Message.created_at, Message.id],
    )

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.buyer_id, self.seller_id)


class Message(Base):
    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_conversation_created", "conversation_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    conversation_id: Mapped[int] = mapped_column(ForeignKey("conversations.id"), nullable=False)
    sender_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    conversation = relationship("Conversation", back_populates="messages")
    sender = relationship("User")
