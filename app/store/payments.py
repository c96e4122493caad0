"""
Payment store: insert-only persistence of masked payment outcomes.

There is no update or delete. A lookup miss returns None;
turning it into a not-found error is the orchestrator's job.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.engine.errors import DuplicatePaymentError
from app.models.domain import PaymentOutcome
from app.models.payment import Payment

logger = logging.getLogger("payment_gateway.store")


class PaymentStore:
    """Maps payment identifiers to stored outcomes."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def add(self, outcome: PaymentOutcome) -> None:
        """
        Store a new outcome.

        Raises:
            DuplicatePaymentError: If an outcome with the same id is already stored.
        """
        async with self._session_factory() as session:
            session.add(Payment.from_outcome(outcome))
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicatePaymentError(outcome.id) from e
        logger.debug("Stored payment %s", outcome.id)

    async def get(self, payment_id: str) -> Optional[PaymentOutcome]:
        async with self._session_factory() as session:
            payment = await session.get(Payment, payment_id)
            return payment.to_outcome() if payment else None
