from __future__ import annotations

from dataclasses import dataclass

from ...core.constants import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, PHONE_MAX_LENGTH
from ...core.enums import RowCheck
from .base import RowFields, RowRule, RowViolation
from .email_format import EmailFormatRule
from .max_length import MaxLengthRule
from .required_field import RequiredFieldRule


@dataclass
class RowRuleFactory:
    """Factory Pattern: build the ordered rule chain used for every data row.

    With `first_failure_only` a row reports only its first violation
    (name, email, phone, email format, then field lengths). Otherwise every
    violation of the row is reported.
    """

    first_failure_only: bool = False

    def rules(self) -> list[RowRule]:
        return [
            RequiredFieldRule("name", RowCheck.NAME_EMPTY),
            RequiredFieldRule("email", RowCheck.EMAIL_EMPTY),
            RequiredFieldRule("phone", RowCheck.PHONE_EMPTY),
            EmailFormatRule(),
            MaxLengthRule("name", NAME_MAX_LENGTH),
            MaxLengthRule("email", EMAIL_MAX_LENGTH),
            MaxLengthRule("phone", PHONE_MAX_LENGTH),
        ]

    def evaluate(self, row: RowFields) -> list[RowViolation]:
        violations: list[RowViolation] = []
        for rule in self.rules():
            v = rule.check(row)
            if v is None:
                continue
            violations.append(v)
            if self.first_failure_only:
                break
        return violations
