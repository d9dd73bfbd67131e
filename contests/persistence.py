"""JSON snapshots of a ContestStore on disk."""

import json
import logging
import os
import tempfile
from pathlib import Path

from contests.store import ContestStore

logger = logging.getLogger(__name__)


def load_store(path: Path) -> ContestStore:
    """Load a store from ``path``, or return an empty one if it is missing."""
    path = Path(path)
    if not path.exists():
        logger.info("No state file at %s, starting with an empty store", path)
        return ContestStore()

    data = json.loads(path.read_text(encoding="utf-8"))
    store = ContestStore.from_dict(data)
    logger.info("Loaded %d contests from %s", len(store), path)
    return store


def save_store(store: ContestStore, path: Path) -> None:
    """Write the store to ``path``.

    The snapshot goes to a temporary file in the same directory first and is
    swapped in with os.replace, so readers only ever see a complete file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    body = json.dumps(store.to_dict(), indent=2, sort_keys=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(body)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Saved %d contests to %s", len(store), path)
