from app.models.domain import PaymentOutcome, PaymentRequest
from app.models.enums import PaymentStatus
from app.models.payment import Base, IdempotencyKey, Payment

__all__ = [
    "Base",
    "IdempotencyKey",
    "Payment",
    "PaymentOutcome",
    "PaymentRequest",
    "PaymentStatus",
]
