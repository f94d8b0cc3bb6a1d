"""
Current route annotation, shared with the renderer.
In-memory storage; holds only the newest successful result.
"""

import logging
import threading
from typing import Optional

from ..models.features import AnnotationSnapshot

logger = logging.getLogger(__name__)


class AnnotationStore:
    """
    Single-slot store for the annotated route.

    Every pipeline run takes a token from ``begin_run``. A finished run may
    only publish if no newer run has started since, so an old run that
    completes late never overwrites a newer route. A failed run publishes
    nothing and the previous snapshot stays current.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._latest_token = 0
        self._snapshot: Optional[AnnotationSnapshot] = None

    def begin_run(self) -> int:
        """Issue the token for a new pipeline run."""
        with self._lock:
            self._latest_token += 1
            return self._latest_token

    @property
    def latest_token(self) -> int:
        """Token of the newest run started."""
        return self._latest_token

    def is_current(self, token: int) -> bool:
        """True if no run has started after the one holding ``token``."""
        return token == self._latest_token

    def publish(self, snapshot: AnnotationSnapshot) -> bool:
        """
        Replace the current snapshot.

        Args:
            snapshot: Result of a finished run, tagged with its token

        Returns:
            True if stored, False if the run was stale and its result dropped
        """
        with self._lock:
            if snapshot.run_token != self._latest_token:
                logger.info(
                    f"Discarding stale annotation from run {snapshot.run_token} "
                    f"(latest is {self._latest_token})"
                )
                return False
            self._snapshot = snapshot
            return True

    def current(self) -> Optional[AnnotationSnapshot]:
        """The newest published snapshot, or None if no run has succeeded yet."""
        return self._snapshot

    def clear(self) -> None:
        """Drop the snapshot (useful for testing). Tokens keep increasing."""
        with self._lock:
            self._snapshot = None


# Global singleton instance
_annotation_store: Optional[AnnotationStore] = None


def get_annotation_store() -> AnnotationStore:
    """Get the global annotation store instance."""
    global _annotation_store
    if _annotation_store is None:
        _annotation_store = AnnotationStore()
    return _annotation_store
