"""Environment helpers for Docker-style ``*_FILE`` secrets."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

SECRET_FILE_SUFFIX = "_FILE"


def _read_secret(key: str, file_path: str) -> str | None:
    try:
        return Path(file_path).read_text(encoding="utf-8").strip()
    except FileNotFoundError as exc:
        event = "env.secret_file.missing"
        error = exc
    except UnicodeDecodeError as exc:
        event = "env.secret_file.decode_failed"
        error = exc
    except OSError as exc:
        event = "env.secret_file.load_failed"
        error = exc
    logger.warning(event, extra={"key": key, "path": file_path, "error": str(error)})
    return None


def load_secret_file_variables() -> List[str]:
    """
    Expose the content of ``KEY_FILE`` files as ``KEY`` environment variables.

    Variables already set take precedence. Unreadable files are logged and
    skipped, never raised, so settings can still fall back to defaults
    (e.g. ``CACHE_REDIS_URL_FILE=/run/secrets/redis_url``).

    Returns:
        The names of the variables that were populated.
    """
    resolved: List[str] = []
    for key, file_path in list(os.environ.items()):
        if not key.endswith(SECRET_FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(SECRET_FILE_SUFFIX)]
        if os.environ.get(target_key):
            continue
        value = _read_secret(key, file_path)
        if value is not None:
            os.environ[target_key] = value
            resolved.append(target_key)
    return resolved


load_secret_file_variables()
