"""Enumerations for the payment gateway domain model."""

from enum import Enum


class PaymentStatus(str, Enum):
    """
    Outcome of a single payment attempt.

    REJECTED is never stored: a request that fails validation is reported
    as an error and never reaches the bank or the payment store.
    """

    AUTHORIZED = "Authorized"
    DECLINED = "Declined"
    REJECTED = "Rejected"
