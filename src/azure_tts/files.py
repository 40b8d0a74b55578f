import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)


def _file_mode(target: Path) -> int:
    """Mode for the written file: the existing target's, else what open() would create."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write_bytes(path: Union[str, Path], data: bytes) -> Path:
    """Write ``data`` to ``path`` so readers see either the old file or the new one.

    The bytes land in a temporary file next to the target and are moved into
    place with ``os.replace``. On failure the target is untouched. The target
    keeps its permission bits when it already exists.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, _file_mode(target))
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    log.info("Wrote %d bytes to %s", len(data), target)
    return target
