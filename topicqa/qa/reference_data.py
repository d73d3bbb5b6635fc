from __future__ import annotations

import logging
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from topicqa.core.logging import SERVER_CLIENT
from topicqa.domain.exceptions import ReferenceDataUnavailableError

logger = logging.getLogger("topicqa.qa")


def _read_text(path: Path) -> str:
    """Synchronous read (called in a threadpool)."""

    return path.read_text(encoding="utf-8")


async def read_reference_data(path: str) -> str:
    """
    Load the whole reference file. It is re-read on every request so edits show up
    without a restart.
    """

    try:
        return await run_in_threadpool(_read_text, Path(path))
    except (OSError, UnicodeDecodeError) as exc:
        logger.error(
            "Error reading the file: %s",
            exc,
            extra={"client_ip": SERVER_CLIENT},
        )
        raise ReferenceDataUnavailableError() from exc
