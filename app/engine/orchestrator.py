"""
Payment orchestrator — the core processing pipeline.

Processes one merchant payment request end to end:

  1. Sanitize (trim card number and CVV)
  2. Idempotency lookup (a bound key short-circuits everything below)
  3. Validation (all rule violations reported together)
  4. Bank authorization (single attempt, no retries)
  5. Masked outcome built, stored, and bound to the idempotency key

Per attempt the state moves received → validating → rejected, or
received → validating → authorizing → authorized | declined | bank_unavailable.
Only authorized and declined outcomes are ever stored.

Idempotency guarantees:
  - A bound key always returns the same outcome and never calls the bank again
  - Concurrent first-time requests with one key are serialized by a per-key
    lock, so the bank is called once per key within a process
  - Failed attempts (rejected, bank unavailable) bind nothing
"""

import logging
import time
import uuid
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Optional

from app.audit.logger import log_event
from app.bank.base import BankGateway, BankRequest, BankVerdict
from app.engine.errors import PaymentNotFound, ValidationFailed
from app.engine.locks import KeyedLocks
from app.engine.validator import validate
from app.models.domain import PaymentOutcome, PaymentRequest
from app.models.enums import PaymentStatus
from app.store.idempotency import IdempotencyCache
from app.store.payments import PaymentStore

logger = logging.getLogger("payment_gateway.orchestrator")

Clock = Callable[[], date]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def sanitize(request: PaymentRequest) -> None:
    """Trim accidental whitespace from the card number and CVV, in place."""
    if request.card_number is not None:
        request.card_number = request.card_number.strip()
    if request.cvv is not None:
        request.cvv = request.cvv.strip()


def build_bank_request(request: PaymentRequest) -> BankRequest:
    return BankRequest(
        card_number=request.card_number,
        expiry_date=f"{request.expiry_month:02d}/{request.expiry_year}",
        currency=request.currency,
        amount=request.amount,
        cvv=request.cvv,
    )


def build_outcome(request: PaymentRequest, verdict: BankVerdict) -> PaymentOutcome:
    return PaymentOutcome(
        id=str(uuid.uuid4()),
        status=PaymentStatus.AUTHORIZED if verdict.authorized else PaymentStatus.DECLINED,
        card_number_last_four=request.card_number[-4:],
        expiry_month=request.expiry_month,
        expiry_year=request.expiry_year,
        currency=request.currency,
        amount=request.amount,
    )


class PaymentOrchestrator:
    """
    Composes validator, bank gateway, payment store and idempotency cache.

    One instance is shared by all requests so the per-key locks are shared too.
    """

    def __init__(
        self,
        store: PaymentStore,
        cache: IdempotencyCache,
        bank: BankGateway,
        clock: Clock = utc_today,
    ):
        self._store = store
        self._cache = cache
        self._bank = bank
        self._clock = clock
        self._locks = KeyedLocks()

    async def get_by_id(self, payment_id: str) -> PaymentOutcome:
        """
        Fetch a previously processed payment.

        Raises:
            PaymentNotFound: If no payment has this identifier.
        """
        logger.debug("Requesting payment with ID %s", payment_id)
        outcome = await self._store.get(payment_id)
        if outcome is None:
            raise PaymentNotFound(payment_id)
        return outcome

    async def process(
        self,
        request: PaymentRequest,
        idempotency_key: Optional[str] = None,
    ) -> PaymentOutcome:
        """
        Process a merchant payment request.

        Args:
            request: The payment request. Card number and CVV are trimmed in place.
            idempotency_key: Optional merchant token; repeats return the first outcome.

        Returns:
            The Authorized or Declined outcome (or the cached one for a bound key).

        Raises:
            ValidationFailed: The request broke at least one rule. Nothing is stored.
            BankUnavailable: The bank could not give a verdict. Nothing is stored.
        """
        sanitize(request)

        if idempotency_key is None:
            return await self._authorize_and_store(request, None)

        async with self._locks.hold(idempotency_key):
            cached = await self._cache.find(idempotency_key)
            if cached is not None:
                log_event("payment.idempotency_hit", idempotency_key=idempotency_key, payment_id=cached.id)
                return cached
            return await self._authorize_and_store(request, idempotency_key)

    async def _authorize_and_store(
        self,
        request: PaymentRequest,
        idempotency_key: Optional[str],
    ) -> PaymentOutcome:
        log_event("payment.received", amount=request.amount, currency=request.currency)

        errors = validate(request, self._clock())
        if errors:
            log_event(
                "payment.validation_failed",
                logging.WARNING,
                status=PaymentStatus.REJECTED.value,
                error_count=len(errors),
                errors=errors,
            )
            raise ValidationFailed(errors)

        bank_request = build_bank_request(request)
        started = time.monotonic()
        # BankUnavailable propagates as-is: no store write, no key binding
        verdict = await self._bank.authorize(bank_request)
        log_event(
            "payment.bank_responded",
            authorized=verdict.authorized,
            bank_latency_ms=int((time.monotonic() - started) * 1000),
        )

        outcome = build_outcome(request, verdict)
        await self._store.add(outcome)

        if idempotency_key is not None:
            outcome = await self._cache.store(idempotency_key, outcome)

        log_event(
            "payment.processed",
            payment_id=outcome.id,
            status=outcome.status.value,
            amount=outcome.amount,
            currency=outcome.currency,
            last_four=outcome.card_number_last_four,
        )
        return outcome
