"""
Intent Validation

DESIGN DECISION: Free-form intents are validated in two stages:

STAGE 1 - SCHEMA VALIDATION:
- Required field presence
- Type and format checks (numbers, calendar dates, known kinds)
- Failing here rejects the intent

STAGE 2 - SEMANTIC VALIDATION:
- Plausibility checks (far-future dates, unfamiliar categories)
- Only produces warnings; it never blocks

Validation NEVER silently fixes input. It reports what is wrong
so the user can correct it.
"""

import math
import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from lifehub.config import TrackerSettings, get_settings
from lifehub.models.records import TransactionKind
from lifehub.models.store import DEFAULT_CATEGORIES
from lifehub.models.validation import ValidationIssue, ValidationResult


# =============================================================================
# LENIENT PARSERS - return None instead of raising
# =============================================================================

def parse_amount(value: Any) -> Optional[float]:
    """A finite number from user input, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(Decimal(str(value)))
    except (InvalidOperation, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_date(value: Any) -> Optional[dt.date]:
    """A calendar date from a date, datetime or ISO string, or None."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            pass
        # Full timestamps are accepted; anything trailing the date is not.
        try:
            return dt.datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def parse_kind(value: Any) -> Optional[TransactionKind]:
    if isinstance(value, TransactionKind):
        return value
    if isinstance(value, str):
        try:
            return TransactionKind(value.strip().lower())
        except ValueError:
            return None
    return None


class TransactionDraft(BaseModel):
    """
    An add-transaction intent exactly as the user entered it.

    CRITICAL: Nothing here is trusted. Every field is raw input
    and must pass TransactionValidator before it becomes a Transaction.
    """

    model_config = ConfigDict(frozen=True)

    date: Any = None
    kind: Any = None
    category: Any = None
    amount: Any = None
    note: Optional[str] = None

    @property
    def parsed_date(self) -> Optional[dt.date]:
        return parse_date(self.date)

    @property
    def parsed_kind(self) -> Optional[TransactionKind]:
        return parse_kind(self.kind)

    @property
    def parsed_amount(self) -> Optional[float]:
        return parse_amount(self.amount)

    @property
    def parsed_category(self) -> Optional[str]:
        if isinstance(self.category, str) and self.category.strip():
            return self.category.strip()
        return None


class TransactionValidator:
    """
    Validates add-transaction drafts.

    Stage 1: Schema validation (blocking)
    Stage 2: Semantic validation (warnings only)
    """

    def __init__(
        self,
        settings: Optional[TrackerSettings] = None,
        known_categories: tuple[str, ...] = DEFAULT_CATEGORIES,
    ):
        self._settings = settings or get_settings().tracker
        self._known_categories = known_categories

    def _validate_schema(
        self,
        draft: TransactionDraft,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: required fields, numbers and dates.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        amount = draft.parsed_amount
        if draft.amount is None or (isinstance(draft.amount, str) and not draft.amount.strip()):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                suggested_fix="Enter how much money moved",
            ))
        elif amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount ({draft.amount!r}) is not a number",
                suggested_fix="Enter digits only, e.g. 12.50",
            ))
        elif amount == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
            ))
        elif amount < 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount cannot be negative",
                suggested_fix="Pick 'expense' instead of entering a negative amount",
            ))

        if draft.date is None or draft.date == "":
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
            ))
        elif draft.parsed_date is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date ({draft.date!r}) is not a calendar date",
                suggested_fix="Use the YYYY-MM-DD format",
            ))

        if draft.kind is None or draft.kind == "":
            issues.append(ValidationIssue(
                field="type",
                issue_type="missing",
                message="Type is required",
            ))
        elif draft.parsed_kind is None:
            issues.append(ValidationIssue(
                field="type",
                issue_type="invalid_value",
                message=f"Type must be 'income' or 'expense', got {draft.kind!r}",
            ))

        if draft.parsed_category is None:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _validate_semantic(
        self,
        draft: TransactionDraft,
        today: dt.date,
    ) -> list[ValidationIssue]:
        """Stage 2: plausibility warnings. Only run on drafts that passed stage 1."""
        issues = []

        max_future_date = today + dt.timedelta(days=self._settings.future_date_tolerance_days)
        if draft.parsed_date > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({draft.parsed_date}) is in the future",
                severity="warning",
            ))

        if draft.parsed_category not in self._known_categories:
            issues.append(ValidationIssue(
                field="category",
                issue_type="unfamiliar_value",
                message=(
                    f"Category '{draft.parsed_category}' is not one of the "
                    "standard categories and has no budget yet"
                ),
                severity="warning",
            ))

        return issues

    def validate(self, draft: TransactionDraft, today: dt.date) -> ValidationResult:
        """
        Run the full validation pipeline.

        Args:
            draft: Raw add-transaction input
            today: Reference date for the future-date check

        Returns:
            ValidationResult with all issues found
        """
        schema_valid, issues = self._validate_schema(draft)
        if schema_valid:
            issues.extend(self._validate_semantic(draft, today))
        return ValidationResult(intent="add_transaction", issues=issues)


def result_from_pydantic(intent: str, error: ValidationError) -> ValidationResult:
    """Translate a record model's ValidationError into a ValidationResult."""
    issues = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or intent
        issues.append(ValidationIssue(
            field=location,
            issue_type=detail["type"],
            message=f"{location}: {detail['msg']}",
        ))
    return ValidationResult(intent=intent, issues=issues)


def invalid(intent: str, field: str, message: str, issue_type: str = "invalid_value") -> ValidationResult:
    """A ValidationResult holding a single blocking issue."""
    return ValidationResult(
        intent=intent,
        issues=[ValidationIssue(field=field, issue_type=issue_type, message=message)],
    )
