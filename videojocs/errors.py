"""Exception types raised by the catalog layers."""


class CatalogError(Exception):
    """Base class for every catalog error."""


class StorageFatalError(CatalogError):
    """Raised when the catalog file cannot be opened for a reason other than
    "not found" (permission denied, a directory in the way, ...).

    There is no recovery path; the hosting application decides whether to
    abort or to report the failure.
    """

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        reason = 'permission denied' if isinstance(error, PermissionError) \
            else (error.strerror or str(error))
        super().__init__(f"Could not open {path!r}, {reason}.")


class StorageWriteError(CatalogError):
    """Raised when writing the catalog text to an already opened file fails."""


class GameNotFoundError(CatalogError, KeyError):
    """Raised when an operation targets an id that is not in the catalog."""

    def __init__(self, game_id: int) -> None:
        self.game_id = game_id
        super().__init__(f"Game not found: {game_id}")

    def __str__(self) -> str:
        return self.args[0]
