"""
In-process bank simulator for local development.

Mirrors the behavior of the bank simulator used in integration
environments, keyed on the last digit of the card number:
  - odd digit  → authorized, with a random authorization code
  - even digit → declined
  - zero       → bank unavailable (simulated 503)
"""

import asyncio
import uuid
from typing import Optional

from app.bank.base import BankGateway, BankRequest, BankVerdict
from app.config import settings
from app.engine.errors import BankUnavailable


class MockBankGateway(BankGateway):
    """Deterministic stand-in for the remote bank."""

    def __init__(self, latency_ms: Optional[int] = None):
        self._latency_ms = latency_ms if latency_ms is not None else settings.mock_latency_ms

    @property
    def name(self) -> str:
        return "mock_bank"

    async def authorize(self, request: BankRequest) -> BankVerdict:
        if self._latency_ms > 0:
            await asyncio.sleep(self._latency_ms / 1000)

        last_digit = int(request.card_number[-1])

        if last_digit == 0:
            raise BankUnavailable("Bank returned error: 503")

        if last_digit % 2 == 1:
            return BankVerdict(authorized=True, authorization_code=str(uuid.uuid4()))

        return BankVerdict(authorized=False)
