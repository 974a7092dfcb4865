"""Intent validation package."""

from lifehub.validation.validator import (
    TransactionDraft,
    TransactionValidator,
    invalid,
    parse_amount,
    parse_date,
    parse_kind,
    result_from_pydantic,
)

__all__ = [
    "TransactionDraft",
    "TransactionValidator",
    "invalid",
    "parse_amount",
    "parse_date",
    "parse_kind",
    "result_from_pydantic",
]
