"""
Validation Models

The result of checking an intent before it is allowed to change the Store.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


Severity = Literal["error", "warning"]


class ValidationIssue(BaseModel):
    """One problem with an intent's input."""

    field: str = Field(..., description="Input the problem was found in")
    issue_type: str = Field(
        ...,
        description="Machine-readable kind, e.g. 'missing', 'invalid_format', 'future_date'"
    )
    message: str = Field(..., description="Shown to the user as-is")
    severity: Severity = "error"
    suggested_fix: Optional[str] = Field(
        default=None,
        description="How the user can correct the input"
    )


class ValidationResult(BaseModel):
    """
    Outcome of validating one intent.

    Warnings never block; any error does.
    """

    intent: str = Field(..., description="Name of the intent that was validated")
    issues: list[ValidationIssue] = Field(default_factory=list)

    def _messages(self, severity: Severity) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == severity]

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        return bool(self._messages("error"))

    @property
    def error_count(self) -> int:
        return len(self._messages("error"))

    @property
    def warnings(self) -> list[str]:
        return self._messages("warning")

    def summary(self) -> str:
        """One line naming everything that has to be fixed."""
        errors = self._messages("error")
        if not errors:
            return "All checks passed"
        return "; ".join(errors)
