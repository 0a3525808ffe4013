"""Orchestrator package - coordinates album publishing."""
from .core import AlbumOrchestrator
from .planner import BatchPlanner
from .publish import PublishHandler, PublishStep

__all__ = ["AlbumOrchestrator", "BatchPlanner", "PublishHandler", "PublishStep"]
