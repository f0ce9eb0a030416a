from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..participants.tokens import generate_scanner_pin
from .connection import DBConfig


@dataclass(frozen=True)
class DemoEvent:
    event_id: str
    organizer_id: int
    slug: str
    scanner_pin: str


def _as_target(db_config: dict) -> DBConfig:
    return DBConfig.from_settings(db_config)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        connection_timeout=target.connect_timeout,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes, skips '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_demo_event(db_config: dict, *, slug: str = "demo-event") -> DemoEvent:
    """Create (or reuse) a demo organizer and event so the station flow can be tried."""

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT organizer_id FROM organizers WHERE email=%s", ("demo@eventcheck.local",))
        row = cur.fetchone()
        if row:
            organizer_id = int(row["organizer_id"])
        else:
            cur.execute(
                "INSERT INTO organizers (name, email) VALUES (%s, %s)",
                ("Demo Organizer", "demo@eventcheck.local"),
            )
            organizer_id = int(cur.lastrowid)

        cur.execute("SELECT event_id, scanner_pin FROM events WHERE slug=%s", (slug,))
        row = cur.fetchone()
        if row:
            conn.commit()
            return DemoEvent(str(row["event_id"]), organizer_id, slug, str(row["scanner_pin"]))

        event_id = str(uuid.uuid4())
        pin = generate_scanner_pin()
        cur.execute(
            """
            INSERT INTO events (event_id, organizer_id, name, slug, event_date, venue, participant_count, scanner_pin)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            """,
            (event_id, organizer_id, "Demo Event", slug, datetime(2030, 1, 1, 9, 0), "Main Hall", 50, pin),
        )
        conn.commit()
        return DemoEvent(event_id, organizer_id, slug, pin)
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
