"""
Data models for browser sessions and the workers that own them.
"""

import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..core.exceptions import UnsupportedBrowserError


class BrowserKind(Enum):
    """Browsers the launcher knows how to start."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"

    @classmethod
    def parse(cls, value: Any) -> "BrowserKind":
        """Match a browser name case-insensitively."""
        if isinstance(value, BrowserKind):
            return value
        name = str(value).strip().lower() if value is not None else ""
        for kind in cls:
            if kind.value == name:
                return kind
        raise UnsupportedBrowserError(
            f"Unsupported browser: {value}. Must be one of "
            f"{[kind.value for kind in cls]}",
            browser=str(value),
        )


@dataclass(frozen=True)
class ExecutionUnit:
    """Identity of one parallel worker."""

    name: str
    ident: int

    @classmethod
    def current(cls) -> "ExecutionUnit":
        """The execution unit of the calling thread."""
        thread = threading.current_thread()
        return cls(name=thread.name, ident=thread.ident)

    def __str__(self) -> str:
        return f"{self.name}:{self.ident}"


@dataclass(frozen=True)
class Session:
    """A live browser handle and its action helper, owned by one unit."""

    browser: Any
    browser_kind: BrowserKind
    unit: ExecutionUnit
    actions: Optional[Any] = None
    created_at: float = field(default_factory=time.time)

    @property
    def age(self) -> float:
        """Seconds since the session was registered."""
        return time.time() - self.created_at
