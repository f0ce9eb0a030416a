from __future__ import annotations

from typing import Optional

from ...common.validators import looks_like_email
from ...core.enums import RowCheck
from .base import RowFields, RowRule, RowViolation


class EmailFormatRule(RowRule):
    """Email must contain '@'. An empty email is RequiredFieldRule's business."""

    def check(self, row: RowFields) -> Optional[RowViolation]:
        if not row.email or looks_like_email(row.email):
            return None
        return RowViolation(check=RowCheck.EMAIL_FORMAT, detail="email format invalid")
