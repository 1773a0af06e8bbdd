"""File reading and atomic writing for orgsift commands."""

import os
from pathlib import Path

import structlog

from orgsift.services.exceptions import InputFileError

logger = structlog.get_logger()


def read_text_file(path: Path) -> str:
    """
    Read a UTF-8 text document.

    Args:
        path: File to read

    Returns:
        File contents

    Raises:
        InputFileError: If the file is missing, unreadable or not UTF-8
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("input_read_failed", path=str(path), error=str(e))
        raise InputFileError(str(path), str(e)) from e

    logger.info("input_read", path=str(path), chars=len(text))
    return text


def atomic_write(path: Path, content: str) -> None:
    """
    Atomically write content to file with temp-file-rename pattern.

    The content is written to a temporary file in the same directory, synced
    to disk and then renamed over the target, so readers never see a partial
    file.

    Args:
        path: Target file path
        content: Content to write

    Raises:
        OSError: On file I/O errors
        PermissionError: On permission errors
    """
    temp_path = path.parent / f".{path.name}.tmp.{os.getpid()}"

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        # On POSIX systems, this is atomic even if target exists
        temp_path.replace(path)

        logger.debug("atomic_write_success", path=str(path), size=len(content))

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error("atomic_write_failed", path=str(path), error=str(e))
        raise
