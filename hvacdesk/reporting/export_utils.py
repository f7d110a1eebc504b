"""
Formatting helpers shared by exports, the invoice document and the CLI.
"""

from datetime import date
from decimal import Decimal

from hvacdesk.config import LocaleConfig


def format_amount(value: Decimal | float | None, locale: LocaleConfig) -> str:
    """Format a number with two decimals and the locale's separators."""
    if value is None:
        return "N/A"
    text = f"{Decimal(value):,.2f}"
    # Swap through a placeholder so "," and "." can trade places
    return (
        text.replace(",", "\0")
        .replace(".", locale.decimal_separator)
        .replace("\0", locale.thousands_separator)
    )


def format_currency(value: Decimal | float | None, locale: LocaleConfig) -> str:
    """Format currency value for display and export."""
    if value is None:
        return "N/A"
    amount = format_amount(abs(Decimal(value)), locale)
    sign = "-" if Decimal(value) < 0 else ""
    return f"{sign}{locale.currency_symbol}{amount}"


def format_date(value: date | None, locale: LocaleConfig) -> str:
    if value is None:
        return ""
    return value.strftime(locale.date_format)
