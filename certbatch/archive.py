"""Packaging rendered certificates into a zip archive and saving it."""

import io
import logging
import os
import re
import tempfile
import zipfile
from pathlib import Path
from typing import Dict, Iterable, Tuple, Union

from .config import DEFAULT_ARCHIVE_NAME
from .errors import PackageError

logger = logging.getLogger(__name__)

# Fixed entry timestamp keeps archives reproducible
ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)

_DISALLOWED = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_filename(name: str, extension: str = ".pdf") -> str:
    """
    Archive entry name for a certificate.

    Drops everything except ASCII letters, digits and whitespace, then turns
    each whitespace run into one underscore: "José #1 (VIP)!" -> "Jos_1_VIP.pdf".
    """
    clean = _WHITESPACE.sub("_", _DISALLOWED.sub("", name))
    return f"{clean}{extension}"


def build_archive(entries: Iterable[Tuple[str, bytes]]) -> bytes:
    """
    Zip (filename, data) pairs in the given order.

    Duplicate filenames are not made unique: the later document replaces the
    earlier one, which keeps its original place in the archive.
    """
    files: Dict[str, bytes] = {}
    for filename, data in entries:
        if filename in files:
            logger.warning("Duplicate archive entry %r, keeping the last document", filename)
        files[filename] = data

    buf = io.BytesIO()
    try:
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
            for filename, data in files.items():
                info = zipfile.ZipInfo(filename, date_time=ENTRY_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                zf.writestr(info, data)
    except Exception as e:
        raise PackageError(f"Failed to build archive: {e}") from e
    return buf.getvalue()


def save_archive(
    data: bytes,
    destination: Union[str, Path] = DEFAULT_ARCHIVE_NAME,
    archive_name: str = DEFAULT_ARCHIVE_NAME,
) -> Path:
    """
    Write archive bytes to destination.

    A directory destination gets archive_name inside it. The file is written
    to a temporary sibling and renamed, so a failed save leaves nothing
    behind. Errors are raised once as PackageError, there is no retry.
    """
    path = Path(destination)
    if path.is_dir():
        path = path / archive_name

    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".certbatch-", suffix=".zip", dir=path.parent)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise PackageError(f"Failed to save {path}: {e}") from e

    logger.info("Saved archive to %s (%d bytes)", path, len(data))
    return path
