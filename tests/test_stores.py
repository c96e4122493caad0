"""Tests for the payment store and idempotency cache."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from app.engine.errors import DuplicatePaymentError
from app.models.domain import PaymentOutcome
from app.models.enums import PaymentStatus


def _outcome(**overrides) -> PaymentOutcome:
    fields = {
        "id": str(uuid.uuid4()),
        "status": PaymentStatus.AUTHORIZED,
        "card_number_last_four": "4321",
        "expiry_month": 12,
        "expiry_year": 2027,
        "currency": "EUR",
        "amount": 1050,
    }
    fields.update(overrides)
    return PaymentOutcome(**fields)


class TestPaymentStore:
    @pytest.mark.asyncio
    async def test_add_then_get(self, store):
        outcome = _outcome()
        await store.add(outcome)
        assert await store.get(outcome.id) == outcome

    @pytest.mark.asyncio
    async def test_declined_status_survives_storage(self, store):
        outcome = _outcome(status=PaymentStatus.DECLINED)
        await store.add(outcome)
        assert (await store.get(outcome.id)).status == PaymentStatus.DECLINED

    @pytest.mark.asyncio
    async def test_miss_returns_none(self, store):
        assert await store.get(str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_duplicate_id_is_rejected(self, store):
        outcome = _outcome()
        await store.add(outcome)

        with pytest.raises(DuplicatePaymentError):
            await store.add(_outcome(id=outcome.id, amount=1))

        assert (await store.get(outcome.id)).amount == 1050


class TestIdempotencyCache:
    @pytest.mark.asyncio
    async def test_unknown_key(self, cache):
        assert await cache.find("nope") is None

    @pytest.mark.asyncio
    async def test_store_then_find(self, store, cache):
        outcome = _outcome()
        await store.add(outcome)

        assert await cache.store("key-1", outcome) == outcome
        assert await cache.find("key-1") == outcome

    @pytest.mark.asyncio
    async def test_binding_is_never_overwritten(self, store, cache):
        first = _outcome()
        second = _outcome(amount=1)
        await store.add(first)
        await store.add(second)

        await cache.store("key-1", first)
        bound = await cache.store("key-1", second)

        assert bound == first
        assert await cache.find("key-1") == first

    @pytest.mark.asyncio
    async def test_failed_bind_without_existing_binding_raises(self, store, cache, monkeypatch):
        first = _outcome()
        second = _outcome()
        await store.add(first)
        await store.add(second)
        await cache.store("key-1", first)

        async def find_nothing(key):
            return None

        # The insert conflicts, yet no binding is visible afterwards
        monkeypatch.setattr(cache, "find", find_nothing)

        with pytest.raises(IntegrityError):
            await cache.store("key-1", second)

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, store, cache):
        first = _outcome()
        second = _outcome()
        await store.add(first)
        await store.add(second)

        await cache.store("key-a", first)
        await cache.store("key-b", second)

        assert (await cache.find("key-a")).id == first.id
        assert (await cache.find("key-b")).id == second.id
