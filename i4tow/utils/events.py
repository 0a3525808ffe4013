import inspect
import logging
from typing import Callable, Dict, List, Optional

from ..models import ProgressEvent

logger = logging.getLogger(__name__)

PROGRESS = "progress"
ALBUM_START = "album_start"
ALBUM_COMPLETE = "album_complete"


class EventEmitter:
    """Simple event emitter for publish events."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}

    def on(self, event_name: str, callback: Callable):
        """Subscribe to an event."""
        if event_name not in self._listeners:
            self._listeners[event_name] = []
        if callback not in self._listeners[event_name]:
            self._listeners[event_name].append(callback)

    def off(self, event_name: str, callback: Callable):
        """Unsubscribe from an event."""
        if event_name in self._listeners:
            if callback in self._listeners[event_name]:
                self._listeners[event_name].remove(callback)

    async def emit(self, event_name: str, *args, **kwargs):
        """Emit an event to all listeners. Listener errors are logged, never raised."""
        if event_name not in self._listeners:
            return

        for callback in self._listeners[event_name][:]:  # listeners may unsubscribe
            try:
                result = callback(*args, **kwargs)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Error in event listener for {event_name}: {e}")

    async def progress(self, step: str, detail: Optional[str] = None):
        """Emit a ProgressEvent."""
        await self.emit(PROGRESS, ProgressEvent(step, detail))
