"""Repository for the video-game catalog (one JSON array per file)."""
import json
from typing import Any, Dict, List

from ..models import validate_game
from .base import BaseRepository


class VideoGameRepository(BaseRepository):
    """Loads and rewrites the complete catalog collection.

    Schema::

        [
            {
                "ID":        <int>,
                "TITOL":     <str>,
                "ANY":       <str>,
                "MODALITAT": <str>,
                "EMPRESA":   <str>
            },
            ...
        ]
    """

    def __init__(self, file_path: str = 'Videojocs_DB.txt',
                 atomic: bool = False) -> None:
        super().__init__(file_path, atomic=atomic)

    def load_all(self) -> List[Dict[str, Any]]:
        """Return the stored collection in on-disk order.

        A missing or empty file, malformed JSON, or any element that is not a
        valid record all yield ``[]``.
        """
        text = self._read()
        if not text:
            return []
        try:
            data = json.loads(text)
            if not isinstance(data, list):
                raise ValueError('top-level value is not an array')
            return [validate_game(item) for item in data]
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError too
            self._log.warning("Could not decode %s, treating it as empty: %s",
                              self._path, exc)
            return []

    def save_all(self, games: List[Dict[str, Any]]) -> None:
        """Encode *games* as JSON and overwrite the file with it."""
        self._write(json.dumps(games, indent=2, ensure_ascii=False))
