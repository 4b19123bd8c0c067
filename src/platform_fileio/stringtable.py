"""Default string interning service."""

from __future__ import annotations

import sys


class InternTable:
    """Interns strings through the interpreter's intern table.

    Satisfies the StringTable protocol structurally. Equal inputs return
    the identical object, so results can be compared with ``is``.
    """

    def insert(self, value: str) -> str:
        """Return the canonical instance of a string."""
        return sys.intern(value)
