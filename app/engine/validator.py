"""
Payment request validation with aggregated error messages.

Before a request is sent to the bank, we verify:
  1. Card number is present, 14-19 characters, digits only
  2. Expiry year and month are present and in range
  3. The card has not expired (the current month is still valid)
  4. Currency is one of the supported ISO codes
  5. Amount is a positive integer in minor units
  6. CVV is present, 3-4 characters, digits only

Every rule is evaluated independently so the merchant gets all problems
back at once, in this order. The message strings are part of the API
contract: they are joined into the rejection message returned to callers.
"""

import calendar
from datetime import date
from typing import Optional

from app.models.domain import PaymentRequest

SUPPORTED_CURRENCIES = ("USD", "GBP", "EUR")

CARD_NUMBER_MIN_LENGTH = 14
CARD_NUMBER_MAX_LENGTH = 19
CVV_MIN_LENGTH = 3
CVV_MAX_LENGTH = 4
MIN_EXPIRY_YEAR = 1
MAX_EXPIRY_YEAR = 9999


def validate(request: PaymentRequest, today: date) -> list[str]:
    """
    Check a payment request against all validation rules.

    Args:
        request: The (already sanitized) payment request.
        today: Current date from the caller's clock; used for the expiry check.

    Returns:
        Human-readable error messages in rule order; empty if the request is valid.
    """
    errors: list[str] = []

    _check_card_number(request.card_number, errors)
    _check_expiry(request.expiry_month, request.expiry_year, today, errors)
    _check_currency(request.currency, errors)
    _check_amount(request.amount, errors)
    _check_cvv(request.cvv, errors)

    return errors


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _is_digits(value: str) -> bool:
    # str.isdigit() accepts non-ASCII digits such as superscripts
    return value.isascii() and value.isdigit()


def _check_card_number(card_number: Optional[str], errors: list[str]) -> None:
    if _is_blank(card_number):
        errors.append("Card number is required")
        return
    if not CARD_NUMBER_MIN_LENGTH <= len(card_number) <= CARD_NUMBER_MAX_LENGTH:
        errors.append("Card number must be between 14 and 19 characters")
    if not _is_digits(card_number):
        errors.append("Card number must contain only digits")


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _check_expiry(
    month: Optional[int],
    year: Optional[int],
    today: date,
    errors: list[str],
) -> None:
    year_ok = False
    month_ok = False

    if year is None:
        errors.append("Expiry year is required")
    elif not MIN_EXPIRY_YEAR <= year <= MAX_EXPIRY_YEAR:
        errors.append("Expiry year must be between 1 and 9999")
    else:
        year_ok = True

    if month is None:
        errors.append("Expiry month is required")
    elif not 1 <= month <= 12:
        errors.append("Expiry month must be between 1 and 12")
    else:
        month_ok = True

    # A card is usable through the last day of its expiry month
    if year_ok and month_ok and last_day_of_month(year, month) < today:
        errors.append("Card has expired")


def _check_currency(currency: Optional[str], errors: list[str]) -> None:
    if _is_blank(currency):
        errors.append("Currency is required")
        return
    if currency not in SUPPORTED_CURRENCIES:
        errors.append("Currency must be one of: " + ", ".join(SUPPORTED_CURRENCIES))


def _check_amount(amount: Optional[int], errors: list[str]) -> None:
    if amount is None:
        errors.append("Amount is required")
        return
    if amount <= 0:
        errors.append("Amount must be greater than zero")


def _check_cvv(cvv: Optional[str], errors: list[str]) -> None:
    if _is_blank(cvv):
        errors.append("CVV is required")
        return
    if not CVV_MIN_LENGTH <= len(cvv) <= CVV_MAX_LENGTH:
        errors.append("CVV must be 3 or 4 characters")
    if not _is_digits(cvv):
        errors.append("CVV must contain only digits")
