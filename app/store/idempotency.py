"""
Idempotency cache: maps merchant-supplied keys to the outcome they produced.

A key is bound at most once. Binding relies on the primary key of
idempotency_keys, so a concurrent second bind loses at the database and
the first outcome stays authoritative. Keys never expire.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.domain import PaymentOutcome
from app.models.payment import IdempotencyKey

logger = logging.getLogger("payment_gateway.idempotency")


class IdempotencyCache:
    """Key → PaymentOutcome bindings, backed by the idempotency_keys table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def find(self, key: str) -> Optional[PaymentOutcome]:
        async with self._session_factory() as session:
            entry = await session.get(IdempotencyKey, key)
            return entry.payment.to_outcome() if entry else None

    async def store(self, key: str, outcome: PaymentOutcome) -> PaymentOutcome:
        """
        Bind a key to an already stored outcome, unless it is bound already.

        Returns:
            The outcome the key is bound to after the call. This is the
            existing binding if another request bound the key first.

        Raises:
            IntegrityError: The insert failed and the key is still unbound.
        """
        async with self._session_factory() as session:
            session.add(IdempotencyKey(key=key, payment_id=outcome.id))
            try:
                await session.commit()
                return outcome
            except IntegrityError as e:
                await session.rollback()
                error = e

        bound = await self.find(key)
        if bound is None:
            # The insert failed for a reason other than an existing binding
            raise error

        logger.warning(
            "Idempotency key already bound to payment %s; keeping it over %s",
            bound.id,
            outcome.id,
        )
        return bound
