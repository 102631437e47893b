"""Business logic for the video-game catalog."""
import contextlib
import logging
import threading
from typing import Any, Dict, List, Optional

from ..errors import GameNotFoundError, StorageWriteError
from ..models import COMPANY, ID, MAX_ID, make_game, seed_games, validate_candidate, validate_game
from ..repositories.videogame_repository import VideoGameRepository


class VideoGameService:
    """Catalog operations, delegating persistence to
    :class:`~videojocs.repositories.videogame_repository.VideoGameRepository`.

    Every operation reloads the full collection from disk, and every mutation
    writes the full collection back.  Without *serialize_writes* two
    overlapping mutations race: the last save wins and two concurrent
    :meth:`create` calls can hand out the same id.  With it, one lock is held
    across each load → mutate → save cycle within this process.

    Rules
    -----
    * The next id is ``max(existing ids) + 1``, or ``1`` for an empty catalog.
    * :meth:`update` replaces the matching record in place; the replacement
      keeps whatever ``ID`` it carries.
    * :meth:`delete` of an absent id still rewrites the file and succeeds.
    """

    def __init__(self, repository: VideoGameRepository,
                 serialize_writes: bool = False) -> None:
        self._repo = repository
        self._lock = threading.Lock() if serialize_writes else None
        self._log = logging.getLogger('videojocs.service')

    def _mutation(self):
        return self._lock if self._lock is not None else contextlib.nullcontext()

    def _save(self, games: List[Dict[str, Any]], action: str) -> bool:
        try:
            self._repo.save_all(games)
        except StorageWriteError as exc:
            self._log.error("Error %s game: %s", action, exc)
            return False
        return True

    @staticmethod
    def _next_id(games: List[Dict[str, Any]]) -> int:
        if not games:
            return 1
        return max(game[ID] for game in games) + 1

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def initialize(self) -> bool:
        """Seed the five example games if the catalog is empty.

        Returns:
            ``True`` if the seed was written; ``False`` if the catalog
            already held games.

        Raises:
            StorageWriteError: if the seed could not be written.
        """
        with self._mutation():
            if self._repo.load_all():
                return False
            self._repo.save_all(seed_games())
        self._log.info("Seeded %s with example games", self._repo.path)
        return True

    def next_id(self) -> int:
        """Return the id the next created game would receive."""
        return self._next_id(self._repo.load_all())

    def create(self, candidate: Dict[str, Any]) -> bool:
        """Append a new game built from *candidate* with a fresh id.

        Any ``ID`` in *candidate* is ignored.

        Returns:
            ``True`` on success; ``False`` if the catalog could not be written
            or the next id would not fit in a stored id.

        Raises:
            ValueError: if *candidate* lacks a field or a field is not a string.
        """
        fields = validate_candidate(candidate)
        with self._mutation():
            games = self._repo.load_all()
            game_id = self._next_id(games)
            if game_id > MAX_ID:
                self._log.error("Error creating game: next id %s exceeds %s", game_id, MAX_ID)
                return False
            game = make_game(game_id, fields)
            games.append(game)
            ok = self._save(games, 'creating')
        if ok:
            self._log.info("Created game %s", game[ID])
        return ok

    def list_all(self) -> List[Dict[str, Any]]:
        """Return every game in on-disk order."""
        return self._repo.load_all()

    def get_by_id(self, game_id: int) -> Optional[Dict[str, Any]]:
        """Return the first game whose id is *game_id*, or ``None``."""
        return next((g for g in self._repo.load_all() if g[ID] == game_id), None)

    def list_by_company(self, company: str) -> List[Dict[str, Any]]:
        """Return the games whose company is exactly *company* (case-sensitive)."""
        return [g for g in self._repo.load_all() if g[COMPANY] == company]

    def update(self, game_id: int, game: Dict[str, Any]) -> bool:
        """Replace the game with id *game_id* by *game*, keeping its position.

        Returns:
            ``True`` on success; ``False`` if the catalog could not be written.

        Raises:
            GameNotFoundError: if no game has id *game_id*; nothing is written.
            ValueError: if *game* is not a valid record.
        """
        record = validate_game(game)
        with self._mutation():
            games = self._repo.load_all()
            index = next((i for i, g in enumerate(games) if g[ID] == game_id), None)
            if index is None:
                raise GameNotFoundError(game_id)
            games[index] = record
            ok = self._save(games, 'updating')
        if ok:
            self._log.info("Updated game %s", game_id)
        return ok

    def delete(self, game_id: int) -> bool:
        """Remove every game with id *game_id* and rewrite the catalog.

        Deleting an id that is not present is not an error.

        Returns:
            ``True`` on success; ``False`` if the catalog could not be written.
        """
        with self._mutation():
            games = [g for g in self._repo.load_all() if g[ID] != game_id]
            ok = self._save(games, 'deleting')
        if ok:
            self._log.info("Deleted game %s", game_id)
        return ok
