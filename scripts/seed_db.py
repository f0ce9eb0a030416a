from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.eventcheck_system.eventcheck_system.database.bootstrap import ensure_demo_event


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    demo = ensure_demo_event(db_config)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )
    print(f"    organizer_id={demo.organizer_id} event_id={demo.event_id} slug={demo.slug} scanner_pin={demo.scanner_pin}")


if __name__ == "__main__":
    main()
