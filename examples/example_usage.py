"""Example: drive the service layer directly (no Flask).

Uploads a small CSV for the demo event created by scripts/seed_db.py,
then checks the first participant in twice to show the idempotent outcome.
"""

import importlib
import io
import sys

from config import get_settings_module

from src.eventcheck_system.eventcheck_system.container import build_container

CSV = "Name,Email,Phone\nAda Lovelace,ada@example.com,0811\nNo Email,,0812\n"


def main(organizer_id: int, event_id: str):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, smtp_config=settings.SMTP_CONFIG)

    result = container.participant_service.upload_participants(
        organizer_id=organizer_id, event_id=event_id, stream=io.StringIO(CSV)
    )
    print(result.to_dict())

    participants = container.participant_service.list_participants(organizer_id=organizer_id, event_id=event_id)
    if participants:
        token = participants[0].token
        print(container.checkin_service.check_in(token, event_id=event_id).to_dict())
        print(container.checkin_service.check_in(token, event_id=event_id).to_dict())


if __name__ == "__main__":
    main(int(sys.argv[1]), sys.argv[2])
