"""
Typed failures raised by the payment orchestration pipeline.

Each one is terminal for the current call; nothing in the core retries.
The API layer maps them to distinct HTTP responses: validation and
not-found are caller errors, BankUnavailable is an upstream failure.
"""


class PaymentGatewayError(Exception):
    """Base exception for payment gateway errors."""


class ValidationFailed(PaymentGatewayError):
    """The payment request broke one or more validation rules."""

    def __init__(self, errors: list[str]):
        super().__init__("Invalid payment request: " + ", ".join(errors))
        self.errors = list(errors)


class BankUnavailable(PaymentGatewayError):
    """The bank could not be reached, timed out, or answered with a non-2xx status."""


class PaymentNotFound(PaymentGatewayError):
    """No stored payment has the requested identifier."""

    def __init__(self, payment_id: str):
        super().__init__(f"Payment not found with ID: {payment_id}")
        self.payment_id = payment_id


class DuplicatePaymentError(PaymentGatewayError):
    """A payment with the same identifier is already stored."""

    def __init__(self, payment_id: str):
        super().__init__(f"Payment already stored with ID: {payment_id}")
        self.payment_id = payment_id
