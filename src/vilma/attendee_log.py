from pathlib import Path

from vilma.errors import StorageError
from vilma.formatter import to_storage_key
from vilma.models.Event import Event


def record(base_path, event: Event, attendee_emails) -> Path:
    """Write the accepted players of an event, one address per line.

    The file is named after the event start and replaced on every call.
    """
    path = Path(base_path) / f"{to_storage_key(event.start)}.txt"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(attendee_emails), encoding="utf-8")
    except OSError as e:
        raise StorageError(f"could not write attendee log {path}: {e}") from e
    return path
