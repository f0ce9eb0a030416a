from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import RowCheck


@dataclass(frozen=True)
class RowFields:
    """Trimmed name/email/phone of one data row."""

    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class RowViolation:
    check: RowCheck
    detail: str


class RowRule(ABC):
    """Strategy Pattern: one independent check applied to every CSV row."""

    @abstractmethod
    def check(self, row: RowFields) -> Optional[RowViolation]:
        raise NotImplementedError
