"""SQLAlchemy ORM models for diaries and their product lines and follow-ups."""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from customer_diary.infrastructure.database.base import Base
from customer_diary.infrastructure.database.models.customer import CustomerModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DiaryModel(Base):
    """ORM model — maps to the 'customer_diary' table."""

    __tablename__ = "customer_diary"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    customer_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True
    )
    created_by: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("staff_users.id", ondelete="SET NULL"), nullable=True
    )
    assigned_to: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("staff_users.id", ondelete="SET NULL"), nullable=True
    )
    created_by_code: Mapped[str | None] = mapped_column(String(16), nullable=True)

    what_they_want: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Pending")
    priority: Mapped[str] = mapped_column(String(10), nullable=False, default="Normal")

    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_ordered: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_texted_customer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    last_viewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Payment
    payment_method: Mapped[str | None] = mapped_column(Text, nullable=True)
    amount_paid: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True, default=Decimal("0"))
    invoice_po: Mapped[str | None] = mapped_column(Text, nullable=True)
    paid_at: Mapped[date | None] = mapped_column(Date, nullable=True)

    store_location: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Supplier order
    supplier: Mapped[str | None] = mapped_column(Text, nullable=True)
    order_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    eta_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    order_status: Mapped[str | None] = mapped_column(String(30), nullable=True, default="pending")
    order_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    customer: Mapped[CustomerModel | None] = relationship(lazy="raise")
    products: Mapped[list["DiaryProductModel"]] = relationship(
        back_populates="diary",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )
    followups: Mapped[list["DiaryFollowupModel"]] = relationship(
        back_populates="diary",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DiaryFollowupModel.created_at.desc()",
        lazy="raise",
    )

    __table_args__ = (
        Index("idx_diary_status", "status"),
        Index("idx_diary_priority", "priority"),
        Index("idx_diary_created_at", "created_at"),
        Index("idx_diary_last_viewed_at", "last_viewed_at"),
        Index("idx_diary_archived_at", "archived_at"),
    )

    def __repr__(self) -> str:
        return f"<DiaryModel(id={self.id}, status='{self.status}')>"


class DiaryProductModel(Base):
    """ORM model — maps to the 'diary_products' table."""

    __tablename__ = "diary_products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    diary_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("customer_diary.id", ondelete="CASCADE"), nullable=False
    )
    upc: Mapped[str | None] = mapped_column(Text, nullable=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    qty: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    line_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    diary: Mapped[DiaryModel] = relationship(back_populates="products", lazy="raise")

    __table_args__ = (
        Index("idx_products_diary_id", "diary_id"),
    )


class DiaryFollowupModel(Base):
    """ORM model — maps to the 'diary_followups' table."""

    __tablename__ = "diary_followups"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    diary_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("customer_diary.id", ondelete="CASCADE"), nullable=False
    )
    entry_type: Mapped[str] = mapped_column(String(10), nullable=False, default="note")
    message: Mapped[str] = mapped_column(Text, nullable=False)
    staff_code: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    diary: Mapped[DiaryModel] = relationship(back_populates="followups", lazy="raise")

    __table_args__ = (
        Index("idx_followups_diary_id", "diary_id"),
    )
