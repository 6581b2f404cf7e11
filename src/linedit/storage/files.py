"""Save documents to and load them from plain text files."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from linedit.document import Document, InvalidLineText
from linedit.runtime import telemetry

from .codec import decode_lines, encode_lines
from .errors import StorageError

PathLike = Union[str, "os.PathLike[str]"]

logger = telemetry.get_logger("linedit.storage")


def save_document(
    document: Document,
    path: PathLike,
    *,
    encoding: str = "utf-8",
    atomic: bool = True,
) -> int:
    """Write ``document`` to ``path`` and return the number of bytes written.

    With ``atomic`` the data goes to a temporary file in the target directory
    which then replaces ``path``; on failure the previous file is left as it
    was.
    """

    target = Path(path)
    data = encode_lines(document.snapshot(), encoding=encoding)
    with telemetry.span(
        "storage::save",
        component="storage",
        metadata={"path": str(target)},
        expected=(StorageError,),
    ):
        try:
            if atomic:
                _write_atomic(target, data)
            else:
                target.write_bytes(data)
        except OSError as exc:
            raise StorageError(
                "Failed to open the file for saving.", path=target
            ) from exc

    document.mark_clean()
    logger.info("saved %d lines to %s", document.line_count, target)
    return len(data)


def load_document(document: Document, path: PathLike, *, encoding: str = "utf-8") -> int:
    """Replace the contents of ``document`` with the lines stored at ``path``.

    The file is read and decoded before the document is touched, so any
    failure leaves the current contents in place. Returns the line count.
    """

    source = Path(path)
    with telemetry.span(
        "storage::load",
        component="storage",
        metadata={"path": str(source)},
        expected=(StorageError,),
    ):
        try:
            data = source.read_bytes()
        except OSError as exc:
            raise StorageError(
                "Failed to open the file for loading.", path=source
            ) from exc
        lines = decode_lines(data, encoding=encoding)
        try:
            document.replace_all(lines)
        except InvalidLineText as exc:
            raise StorageError(str(exc), path=source) from exc

    document.mark_clean()
    logger.info("loaded %d lines from %s", len(lines), source)
    return len(lines)


def _write_atomic(target: Path, data: bytes) -> None:
    fd, temp_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temp_name, _target_mode(target))
        os.replace(temp_name, target)
    except BaseException:
        if os.path.exists(temp_name):
            os.remove(temp_name)
        raise


def _target_mode(target: Path) -> int:
    """Permission bits the saved file should end up with."""

    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


__all__ = ["save_document", "load_document"]
