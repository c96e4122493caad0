"""
Payment endpoints for merchants.

POST /payments      — Submit a card payment (optional Idempotency-Key header).
GET  /payments/{id} — Retrieve a processed payment by its identifier.

Responses never include the full card number or the CVV.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Header
from pydantic import BaseModel, StrictInt, StrictStr

from app.api.deps import get_orchestrator
from app.engine.orchestrator import PaymentOrchestrator
from app.models.domain import PaymentOutcome, PaymentRequest

router = APIRouter(prefix="/payments", tags=["payments"])


class PostPaymentRequest(BaseModel):
    # Optional so the validator can report every missing field; strict so a
    # JSON true is never read as the integer 1
    card_number: Optional[StrictStr] = None
    expiry_month: Optional[StrictInt] = None
    expiry_year: Optional[StrictInt] = None
    currency: Optional[StrictStr] = None
    amount: Optional[StrictInt] = None
    cvv: Optional[StrictStr] = None

    model_config = {"extra": "forbid"}

    def to_domain(self) -> PaymentRequest:
        return PaymentRequest(**self.model_dump())


class PaymentResponse(BaseModel):
    id: str
    status: str
    card_number_last_four: str
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int


def _outcome_to_response(outcome: PaymentOutcome) -> PaymentResponse:
    return PaymentResponse(
        id=outcome.id,
        status=outcome.status.value,
        card_number_last_four=outcome.card_number_last_four,
        expiry_month=outcome.expiry_month,
        expiry_year=outcome.expiry_year,
        currency=outcome.currency,
        amount=outcome.amount,
    )


@router.post("", response_model=PaymentResponse)
async def process_payment(
    body: PostPaymentRequest,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    orchestrator: PaymentOrchestrator = Depends(get_orchestrator),
):
    """
    Process a new card payment through the bank.

    Repeating a request with the same Idempotency-Key returns the original
    result without contacting the bank again, even if the body differs.
    """
    outcome = await orchestrator.process(body.to_domain(), idempotency_key)
    return _outcome_to_response(outcome)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: uuid.UUID,
    orchestrator: PaymentOrchestrator = Depends(get_orchestrator),
):
    """Get a previously processed payment."""
    outcome = await orchestrator.get_by_id(str(payment_id))
    return _outcome_to_response(outcome)
