"""FastAPI dependency providers."""

from fastapi import Request

from app.engine.orchestrator import PaymentOrchestrator


def get_orchestrator(request: Request) -> PaymentOrchestrator:
    """The orchestrator built at startup and shared by every request."""
    return request.app.state.orchestrator
