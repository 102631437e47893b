"""Wire format of catalog records.

Records are plain dicts keyed by the storage identifiers below; the key order
is the order in which they are written to disk::

    {"ID": 1, "TITOL": "...", "ANY": "2017", "MODALITAT": "...", "EMPRESA": "..."}

Only types are checked.  ``ANY`` is free text and is not required to be
numeric.
"""
from typing import Any, Dict, List

ID = 'ID'
TITLE = 'TITOL'
YEAR = 'ANY'
MODE = 'MODALITAT'
COMPANY = 'EMPRESA'

CANDIDATE_FIELDS = (TITLE, YEAR, MODE, COMPANY)
RECORD_FIELDS = (ID,) + CANDIDATE_FIELDS

# Stored ids are signed 32-bit integers.
MIN_ID = -2 ** 31
MAX_ID = 2 ** 31 - 1


def validate_candidate(data: Any) -> Dict[str, str]:
    """Return a candidate dict (no ``ID``) built from *data*.

    Raises:
        ValueError: if *data* is not an object or a text field is missing
            or not a string.
    """
    if not isinstance(data, dict):
        raise ValueError('expected a JSON object')
    candidate = {}
    for field in CANDIDATE_FIELDS:
        if field not in data:
            raise ValueError(f'missing field {field}')
        if not isinstance(data[field], str):
            raise ValueError(f'field {field} must be a string')
        candidate[field] = data[field]
    return candidate


def validate_game(data: Any) -> Dict[str, Any]:
    """Return a full record dict built from *data*, in wire key order.

    Unknown keys are dropped.

    Raises:
        ValueError: if a field is missing or has the wrong type, or the id
            is out of range.
    """
    candidate = validate_candidate(data)
    if ID not in data:
        raise ValueError(f'missing field {ID}')
    game_id = data[ID]
    # bool is a subclass of int
    if isinstance(game_id, bool) or not isinstance(game_id, int):
        raise ValueError(f'field {ID} must be an integer')
    if not MIN_ID <= game_id <= MAX_ID:
        raise ValueError(f'field {ID} out of range')
    return make_game(game_id, candidate)


def make_game(game_id: int, candidate: Dict[str, str]) -> Dict[str, Any]:
    """Combine an id with candidate fields into a record."""
    game: Dict[str, Any] = {ID: game_id}
    for field in CANDIDATE_FIELDS:
        game[field] = candidate[field]
    return game


def seed_games() -> List[Dict[str, Any]]:
    """Return a fresh copy of the five example records."""
    return [
        make_game(1, {TITLE: 'The Legend of Zelda: Breath of the Wild',
                      YEAR: '2017', MODE: 'Aventura', COMPANY: 'Nintendo'}),
        make_game(2, {TITLE: 'The Witcher 3: Wild Hunt',
                      YEAR: '2015', MODE: 'Rol', COMPANY: 'CD Projekt'}),
        make_game(3, {TITLE: 'Red Dead Redemption 2',
                      YEAR: '2018', MODE: 'Aventura', COMPANY: 'Rockstar'}),
        make_game(4, {TITLE: 'The Elder Scrolls V: Skyrim',
                      YEAR: '2011', MODE: 'Rol', COMPANY: 'Bethesda'}),
        make_game(5, {TITLE: 'Grand Theft Auto V',
                      YEAR: '2013', MODE: 'Aventura', COMPANY: 'Rockstar'}),
    ]
