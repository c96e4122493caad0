"""Test doubles and request builders shared across test modules."""

import asyncio
from datetime import date
from typing import Optional

from app.bank.base import BankGateway, BankRequest, BankVerdict
from app.models.domain import PaymentRequest

FIXED_TODAY = date(2025, 1, 15)


class StubBankGateway(BankGateway):
    """Bank double that records every call and answers with a fixed verdict."""

    def __init__(
        self,
        authorized: bool = True,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.authorized = authorized
        self.error = error
        self.delay = delay
        self.calls: list[BankRequest] = []

    @property
    def name(self) -> str:
        return "stub_bank"

    async def authorize(self, request: BankRequest) -> BankVerdict:
        self.calls.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return BankVerdict(
            authorized=self.authorized,
            authorization_code="auth-0001" if self.authorized else "",
        )


def make_request(**overrides) -> PaymentRequest:
    """A request that passes validation against FIXED_TODAY."""
    fields = {
        "card_number": "2222405343248877",
        "expiry_month": 4,
        "expiry_year": 2026,
        "currency": "GBP",
        "amount": 100,
        "cvv": "123",
    }
    fields.update(overrides)
    return PaymentRequest(**fields)
