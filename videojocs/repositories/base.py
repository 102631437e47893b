"""Storage primitive and the repository base class built on it."""
import logging
import os
import tempfile

from ..errors import StorageFatalError, StorageWriteError

_log = logging.getLogger('videojocs.storage')


def _fatal(path: str, exc: OSError) -> StorageFatalError:
    error = StorageFatalError(path, exc)
    _log.critical("%s", error)
    return error


def _open(path: str, mode: str):
    """Open *path* as UTF-8 text, turning any OS error into :class:`StorageFatalError`."""
    try:
        return open(path, mode, encoding='utf-8', newline='')
    except OSError as exc:
        raise _fatal(path, exc) from exc


def load(path: str) -> str:
    """Return the whole contents of *path* as text.

    A missing file is created empty and ``''`` is returned.  Contents that are
    not valid UTF-8 also read as ``''``.

    Raises:
        StorageFatalError: if the file exists but cannot be opened or read.
    """
    try:
        with open(path, 'rb') as fh:
            raw = fh.read()
    except FileNotFoundError:
        _open(path, 'w').close()
        _log.info("Created empty catalog file %s", path)
        return ''
    except OSError as exc:
        raise _fatal(path, exc) from exc
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        _log.warning("%s is not valid UTF-8, reading it as empty", path)
        return ''


def save(text: str, path: str, atomic: bool = False) -> None:
    """Replace the contents of *path* with *text*, creating it if needed.

    By default the file is truncated in place.  With *atomic* the text goes to
    a sibling temp file which is then renamed over *path*, so a failed write
    never leaves a partially written catalog behind.

    Raises:
        StorageFatalError: if the file (or temp file) cannot be opened.
        StorageWriteError: if the write itself fails.
    """
    if atomic:
        _save_atomic(text, path)
        return
    fh = _open(path, 'w')
    try:
        with fh:
            fh.write(text)
    except OSError as exc:
        raise StorageWriteError(f"Could not write {path!r}: {exc}") from exc


def _save_atomic(text: str, path: str) -> None:
    dir_name = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix='.tmp')
    except OSError as exc:
        raise _fatal(path, exc) from exc
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as fh:
            fh.write(text)
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise StorageWriteError(f"Could not write {path!r}: {exc}") from exc


class BaseRepository:
    """Provides whole-file text persistence for a single data file.

    Nothing is cached: every :meth:`_read` goes back to disk and every
    :meth:`_write` rewrites the complete file, so the file is the only
    source of truth.
    """

    def __init__(self, file_path: str, atomic: bool = False) -> None:
        self._path = file_path
        self._atomic = atomic
        self._log = logging.getLogger(f'videojocs.repository.{type(self).__name__}')

    @property
    def path(self) -> str:
        return self._path

    def _read(self) -> str:
        return load(self._path)

    def _write(self, text: str) -> None:
        save(text, self._path, atomic=self._atomic)
