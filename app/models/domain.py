"""Transient and stored payment shapes used by the orchestration pipeline."""

from dataclasses import dataclass, field
from typing import Optional

from app.models.enums import PaymentStatus


@dataclass
class PaymentRequest:
    """
    A merchant's payment request, alive only for one orchestration call.

    Every field is optional so the validator can report what is missing.
    card_number and cvv are sensitive and hidden from repr.
    """

    card_number: Optional[str] = field(default=None, repr=False)
    expiry_month: Optional[int] = None
    expiry_year: Optional[int] = None
    currency: Optional[str] = None
    amount: Optional[int] = None  # Smallest currency unit
    cvv: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class PaymentOutcome:
    """Masked result of a processed payment. Never mutated once created."""

    id: str
    status: PaymentStatus
    card_number_last_four: str
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int
