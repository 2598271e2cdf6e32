from __future__ import annotations

import logging
from pathlib import Path

from pyhdrio.errors import CorruptDataError, ImageIOError

logger = logging.getLogger(__name__)


def read_bytes(path: str | Path) -> bytes:
    """Read a whole file, mapping open failures to `ImageIOError`."""

    p = Path(path)
    try:
        f = p.open("rb")
    except OSError as exc:
        raise ImageIOError(f"cannot open file '{p}'") from exc

    with f:
        try:
            return f.read()
        except OSError as exc:
            raise CorruptDataError(f"failed to read file '{p}'") from exc


def write_bytes(path: str | Path, payload: bytes) -> None:
    p = Path(path)
    try:
        f = p.open("wb")
    except OSError as exc:
        raise ImageIOError(f"cannot open file '{p}'") from exc

    with f:
        try:
            f.write(payload)
        except OSError as exc:
            raise ImageIOError(f"failed to write file '{p}'") from exc

    logger.debug("Wrote %d bytes to %s", len(payload), p)
