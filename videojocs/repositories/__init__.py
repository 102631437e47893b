"""Repository package - expose the storage layer from one import."""
from .base import BaseRepository, load, save
from .videogame_repository import VideoGameRepository

__all__ = [
    'BaseRepository',
    'VideoGameRepository',
    'load',
    'save',
]
