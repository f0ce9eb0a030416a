from __future__ import annotations

from typing import Optional

from ...core.enums import RowCheck
from .base import RowFields, RowRule, RowViolation


class MaxLengthRule(RowRule):
    """Field must fit its storage column."""

    def __init__(self, field_name: str, max_length: int):
        self.field_name = field_name
        self.max_length = int(max_length)

    def check(self, row: RowFields) -> Optional[RowViolation]:
        if len(getattr(row, self.field_name)) <= self.max_length:
            return None
        return RowViolation(
            check=RowCheck.FIELD_TOO_LONG,
            detail=f"{self.field_name} longer than {self.max_length} characters",
        )
