"""
Per-worker session registry.

Maps each execution unit to the one session it owns. Entries are only ever
read or written on behalf of their own unit; the lock guards the shared map,
not the sessions.
"""

import threading
from typing import Dict, List, Optional

from ..core.exceptions import SessionNotInitializedError
from ..core.logging_config import get_logger
from .models import ExecutionUnit, Session


class SessionRegistry:
    """Holds the active session of every execution unit."""

    def __init__(self):
        self._sessions: Dict[ExecutionUnit, Session] = {}
        self._lock = threading.Lock()
        self.logger = get_logger(__name__)

    def set(
        self, session: Session, unit: Optional[ExecutionUnit] = None
    ) -> Optional[Session]:
        """
        Register a session for a unit, replacing any existing entry.

        Args:
            session: Session to register
            unit: Owning unit; defaults to the calling thread's unit

        Returns:
            The replaced session, if there was one
        """
        unit = unit or ExecutionUnit.current()
        with self._lock:
            previous = self._sessions.get(unit)
            self._sessions[unit] = session
        if previous is not None:
            self.logger.warning(f"Replaced existing session for {unit}")
        return previous

    def get(self, unit: Optional[ExecutionUnit] = None) -> Session:
        """
        Get the session owned by a unit.

        Raises:
            SessionNotInitializedError: If the unit has no session
        """
        unit = unit or ExecutionUnit.current()
        with self._lock:
            session = self._sessions.get(unit)
        if session is None:
            raise SessionNotInitializedError(
                f"WebDriver not initialized for {unit}", unit=str(unit)
            )
        return session

    def clear(self, unit: Optional[ExecutionUnit] = None) -> Optional[Session]:
        """Remove and return a unit's session. Safe to call when already clear."""
        unit = unit or ExecutionUnit.current()
        with self._lock:
            return self._sessions.pop(unit, None)

    def has_session(self, unit: Optional[ExecutionUnit] = None) -> bool:
        unit = unit or ExecutionUnit.current()
        with self._lock:
            return unit in self._sessions

    def active_units(self) -> List[ExecutionUnit]:
        with self._lock:
            return list(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
