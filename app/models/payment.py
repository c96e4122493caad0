"""SQLAlchemy models for the payment gateway."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, relationship

from app.models.domain import PaymentOutcome
from app.models.enums import PaymentStatus


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Payment(Base):
    """
    A processed payment (Authorized or Declined).

    Only the last four digits of the card are kept. Rows are insert-only:
    nothing in the gateway updates or deletes them.
    """

    __tablename__ = "payments"

    id = Column(String(36), primary_key=True)
    status = Column(String(16), nullable=False)
    card_number_last_four = Column(String(4), nullable=False)
    expiry_month = Column(Integer, nullable=False)
    expiry_year = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    amount = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    @classmethod
    def from_outcome(cls, outcome: PaymentOutcome) -> "Payment":
        return cls(
            id=outcome.id,
            status=outcome.status.value,
            card_number_last_four=outcome.card_number_last_four,
            expiry_month=outcome.expiry_month,
            expiry_year=outcome.expiry_year,
            currency=outcome.currency,
            amount=outcome.amount,
        )

    def to_outcome(self) -> PaymentOutcome:
        return PaymentOutcome(
            id=self.id,
            status=PaymentStatus(self.status),
            card_number_last_four=self.card_number_last_four,
            expiry_month=self.expiry_month,
            expiry_year=self.expiry_year,
            currency=self.currency,
            amount=self.amount,
        )


class IdempotencyKey(Base):
    """
    Binding of a merchant-supplied idempotency key to the payment it produced.

    The key is the primary key, so a second bind for the same key fails at
    the database instead of overwriting the first one.
    """

    __tablename__ = "idempotency_keys"

    key = Column(String(255), primary_key=True)
    payment_id = Column(String(36), ForeignKey("payments.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    payment = relationship("Payment", lazy="joined")
