import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from storekeeper.errors import StorageError
from storekeeper.models import StoreSnapshot

logger = logging.getLogger(__name__)


def save_snapshot(snapshot: StoreSnapshot, path: Path) -> None:
    """Write ``snapshot`` to ``path`` as pretty-printed JSON.

    The document is written to a temporary file next to the target and then
    swapped in with ``os.replace``, so readers see either the old snapshot
    or the new one, never a half-written file.
    """
    path = Path(path)
    payload = snapshot.model_dump_json(indent=2)
    directory = path.parent
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=directory,
        )
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.write("\n")
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageError(f"Write error: {exc}") from exc

    logger.info(
        "snapshot saved",
        extra={"extra": {
            "path": str(path),
            "products": len(snapshot.products),
            "sales": len(snapshot.sales),
            "purchases": len(snapshot.purchases),
        }},
    )


def load_snapshot(path: Path) -> Optional[StoreSnapshot]:
    """Return the snapshot stored at ``path``, or None if there is none."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("no snapshot found", extra={"extra": {"path": str(path)}})
        return None
    except OSError as exc:
        raise StorageError(f"Read error: {exc}") from exc

    try:
        snapshot = StoreSnapshot.model_validate_json(raw)
    except ValidationError as exc:
        raise StorageError(f"Deserialize error: {exc}") from exc

    logger.info("snapshot loaded", extra={"extra": {"path": str(path)}})
    return snapshot
