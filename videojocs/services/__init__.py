"""Services package - expose the catalog service from one import."""
from .videogame_service import VideoGameService

__all__ = [
    'VideoGameService',
]
