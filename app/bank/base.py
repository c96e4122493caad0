"""
Abstract bank gateway interface.

The bank is the external service that authorizes card payments. The
orchestrator only depends on this interface, so the HTTP client, the
local simulator and test stubs are interchangeable.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class BankRequest:
    """
    Authorization request in the bank's wire shape.

    Carries the full card number and CVV, so it must not outlive the bank
    call. Both are excluded from repr to keep them out of logs.
    """

    card_number: str = field(repr=False)
    expiry_date: str  # "MM/YYYY"
    currency: str
    amount: int
    cvv: str = field(repr=False)

    def to_payload(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BankVerdict:
    """The bank's answer. authorized=False is a business decline, not a failure."""

    authorized: bool
    authorization_code: str = ""


class BankGateway(ABC):
    """Abstract base class for bank integrations."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Gateway identifier (e.g. 'http_bank')."""
        ...

    @abstractmethod
    async def authorize(self, request: BankRequest) -> BankVerdict:
        """
        Ask the bank to authorize a payment. A single attempt, never retried.

        Raises:
            BankUnavailable: On connection errors, timeouts, or non-2xx responses.
        """
        ...

    async def aclose(self) -> None:
        """Release any held connections."""
