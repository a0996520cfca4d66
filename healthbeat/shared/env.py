"""Environment utilities for resolving Docker secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

_FILE_SUFFIX = "_FILE"


def _read_secret(key: str, file_path: str) -> str | None:
    try:
        return Path(file_path).read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(
            "env.secret_file.unreadable",
            extra={"key": key, "path": file_path, "error": str(exc)},
        )
        return None


def load_secret_file_variables() -> None:
    """
    Expose ``KEY_FILE`` secrets as ``KEY`` environment variables.

    Mongo URIs and broker credentials are usually mounted as secrets, so
    ``DB_MONGO_URI_FILE=/run/secrets/mongo`` becomes ``DB_MONGO_URI``.
    Variables that are already set win over the file. Unreadable files
    are logged and skipped.
    """
    for key, file_path in list(os.environ.items()):
        if not key.endswith(_FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(_FILE_SUFFIX)]
        if os.environ.get(target_key):
            continue
        value = _read_secret(key, file_path)
        if value is not None:
            os.environ[target_key] = value


load_secret_file_variables()
