"""
HTTP bank gateway.

Posts authorization requests to the bank's /payments endpoint and turns
every infrastructure problem (connection errors, timeouts, non-2xx
statuses, unreadable bodies) into BankUnavailable, so the orchestrator
only ever sees a verdict or that single failure kind.
"""

import logging
from typing import Optional

import httpx

from app.bank.base import BankGateway, BankRequest, BankVerdict
from app.config import settings
from app.engine.errors import BankUnavailable

logger = logging.getLogger("payment_gateway.bank")


def default_timeout() -> httpx.Timeout:
    return httpx.Timeout(
        settings.bank_read_timeout_seconds,
        connect=settings.bank_connect_timeout_seconds,
    )


class HttpBankGateway(BankGateway):
    """Bank gateway backed by an httpx.AsyncClient."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = (base_url or settings.bank_url).rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=default_timeout())

    @property
    def name(self) -> str:
        return "http_bank"

    async def authorize(self, request: BankRequest) -> BankVerdict:
        url = f"{self._base_url}/payments"
        try:
            response = await self._client.post(url, json=request.to_payload())
        except httpx.TimeoutException as e:
            logger.error("Bank call timed out: %s", e)
            raise BankUnavailable(f"Bank is unavailable: timed out ({type(e).__name__})") from e
        except httpx.TransportError as e:
            logger.error("Bank call failed: %s", e)
            raise BankUnavailable(f"Bank is unavailable: {e}") from e

        if not response.is_success:
            logger.error("Bank returned HTTP %d", response.status_code)
            raise BankUnavailable(f"Bank returned error: {response.status_code}")

        return self._parse_verdict(response)

    @staticmethod
    def _parse_verdict(response: httpx.Response) -> BankVerdict:
        try:
            data = response.json()
            authorized = data["authorized"]
            code = data.get("authorization_code") or ""
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise BankUnavailable("Bank returned an unreadable response") from e

        if not isinstance(authorized, bool):
            raise BankUnavailable("Bank returned an unreadable response")

        return BankVerdict(authorized=authorized, authorization_code=str(code))

    async def aclose(self) -> None:
        await self._client.aclose()
