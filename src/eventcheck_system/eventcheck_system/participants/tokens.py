"""Credential generation. Tokens and scanner PINs come from the OS CSPRNG (`secrets`)."""

from __future__ import annotations

import secrets
from typing import Iterable, Sequence

from ..common.validators import is_lower_hex
from ..core.constants import SCANNER_PIN_LENGTH, TOKEN_BYTES, TOKEN_LENGTH
from .model import NewParticipant, ParticipantDraft


def generate_token() -> str:
    """32 lowercase hex characters (128 random bits)."""
    return secrets.token_hex(TOKEN_BYTES)


def is_well_formed_token(value: str) -> bool:
    return len(value) == TOKEN_LENGTH and is_lower_hex(value)


def generate_scanner_pin() -> str:
    """Zero-padded numeric PIN, e.g. '0427'."""
    return f"{secrets.randbelow(10 ** SCANNER_PIN_LENGTH):0{SCANNER_PIN_LENGTH}d}"


def issue_tokens(event_id: str, drafts: Sequence[ParticipantDraft], *, taken: Iterable[str] = ()) -> list[NewParticipant]:
    """Attach one fresh token to every draft, in order, with no duplicates in the batch."""

    seen = set(taken)
    issued: list[NewParticipant] = []
    for d in drafts:
        token = generate_token()
        while token in seen:
            token = generate_token()
        seen.add(token)
        issued.append(NewParticipant(event_id=event_id, name=d.name, email=d.email, phone=d.phone, token=token))
    return issued
