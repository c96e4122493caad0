"""
Payment Gateway — card payment processing API.

Merchants submit card payments which are validated, authorized by the
acquiring bank, and stored with the card number masked to its last four
digits. Processed payments can be retrieved later by identifier.

Start the server:
    uvicorn app.main:app --reload

Point it at a bank with BANK_URL, or set USE_MOCK_BANK=true to run
against the in-process simulator.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.errors import register_exception_handlers
from app.api.health import router as health_router
from app.api.middleware import RequestLoggingMiddleware
from app.api.payments import router as payments_router
from app.audit.logger import CorrelationIdFilter
from app.bank.base import BankGateway
from app.bank.http_gateway import HttpBankGateway
from app.bank.mock_bank import MockBankGateway
from app.config import settings
from app.database import async_session, init_db
from app.engine.orchestrator import PaymentOrchestrator
from app.store.idempotency import IdempotencyCache
from app.store.payments import PaymentStore

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s",
)
for handler in logging.getLogger().handlers:
    handler.addFilter(CorrelationIdFilter())

logger = logging.getLogger("payment_gateway")


def build_bank_gateway() -> BankGateway:
    if settings.use_mock_bank:
        return MockBankGateway()
    return HttpBankGateway()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and wire the orchestrator on startup."""
    await init_db()
    bank = build_bank_gateway()
    app.state.orchestrator = PaymentOrchestrator(
        store=PaymentStore(async_session),
        cache=IdempotencyCache(async_session),
        bank=bank,
    )
    logger.info("Payment gateway started with bank gateway %s", bank.name)
    yield
    await bank.aclose()


app = FastAPI(
    title="Payment Gateway",
    description=(
        "Card payment gateway for merchants. Validates payment requests, "
        "authorizes them with the acquiring bank, and stores masked results "
        "with idempotent submission via the Idempotency-Key header."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)

app.include_router(health_router)
app.include_router(payments_router, prefix="/api/v1")
