"""Utilities."""
from .events import ALBUM_COMPLETE, ALBUM_START, PROGRESS, EventEmitter

__all__ = ["EventEmitter", "PROGRESS", "ALBUM_START", "ALBUM_COMPLETE"]
