from __future__ import annotations

from typing import Optional

from ...core.enums import RowCheck
from .base import RowFields, RowRule, RowViolation


class RequiredFieldRule(RowRule):
    """Field must be non-empty after trimming."""

    def __init__(self, field_name: str, check: RowCheck):
        self.field_name = field_name
        self._check = check

    def check(self, row: RowFields) -> Optional[RowViolation]:
        if getattr(row, self.field_name):
            return None
        return RowViolation(check=self._check, detail=f"{self.field_name} empty")
