from __future__ import annotations

import csv
import io
from typing import Iterable, Optional

from ..core.constants import REQUIRED_CSV_COLUMNS
from ..core.enums import RowCheck
from ..core.exceptions import EmptyInputError, FormatError, RowValidationError
from .model import ParseResult, ParticipantDraft
from .rules.base import RowFields
from .rules.factory import RowRuleFactory


def decode_upload(raw: bytes) -> io.StringIO:
    """Turn uploaded bytes into a text stream (UTF-8, optional BOM)."""

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FormatError(f"CSV file is not valid UTF-8: {exc.reason}") from exc
    return io.StringIO(text, newline="")


def _is_blank(record: list[str]) -> bool:
    return not record or (len(record) == 1 and not record[0].strip())


def _resolve_header(headers: list[str]) -> dict[str, int]:
    header_map = {h.strip().lower(): i for i, h in enumerate(headers)}
    for col in REQUIRED_CSV_COLUMNS:
        if col not in header_map:
            raise FormatError(f"column '{col}' not found in CSV", column=col)
    return header_map


def parse_participants(stream: Iterable[str], *, rules: Optional[RowRuleFactory] = None) -> ParseResult:
    """Parse a participants CSV into drafts plus per-row errors.

    The header must name `name`, `email` and `phone` (any case, any order);
    otherwise FormatError is raised before any data row is read. A header with
    no data rows raises EmptyInputError. Row numbers count data rows from 1.
    """

    rules = rules or RowRuleFactory()
    reader = csv.reader(stream)

    headers: Optional[list[str]] = None
    try:
        for record in reader:
            if not _is_blank(record):
                headers = record
                break
    except csv.Error as exc:
        raise FormatError(f"failed to read CSV header: {exc}") from exc
    if headers is None:
        raise EmptyInputError("CSV file is empty")

    header_map = _resolve_header(headers)
    idx_name, idx_email, idx_phone = (header_map[c] for c in REQUIRED_CSV_COLUMNS)

    drafts: list[ParticipantDraft] = []
    errors: list[RowValidationError] = []
    row_number = 0

    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            row_number += 1
            errors.append(
                RowValidationError(row_number=row_number, check=RowCheck.MALFORMED_ROW, detail=f"failed to read data - {exc}")
            )
            continue

        if _is_blank(record):
            continue
        row_number += 1

        if len(record) != len(headers):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    check=RowCheck.MALFORMED_ROW,
                    detail=f"expected {len(headers)} fields, got {len(record)}",
                )
            )
            continue

        row = RowFields(
            name=record[idx_name].strip(),
            email=record[idx_email].strip(),
            phone=record[idx_phone].strip(),
        )
        violations = rules.evaluate(row)
        if violations:
            errors.extend(
                RowValidationError(row_number=row_number, check=v.check, detail=v.detail) for v in violations
            )
            continue

        drafts.append(ParticipantDraft(name=row.name, email=row.email, phone=row.phone, row_number=row_number))

    if not drafts and not errors:
        raise EmptyInputError("no data to ingest: CSV has a header but no rows")

    return ParseResult(drafts=drafts, row_errors=errors)
