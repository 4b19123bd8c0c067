"""Precondition checks for caller contracts.

A broken contract (reading a closed file, seeking before the start,
passing no buffer) is a bug in the caller, not an I/O outcome. In strict
mode it raises ContractViolation; otherwise it is logged and the
operation falls back to a no-op.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ContractViolation(AssertionError):
    """A caller broke an operation's precondition."""

    pass


class Contracts:
    """Evaluates preconditions under a strict or tolerant policy."""

    __slots__ = ("strict",)

    def __init__(self, strict: bool = __debug__) -> None:
        """Initialize the checker.

        Args:
            strict: Raise on violation. Defaults to True unless Python
                runs with -O.
        """
        self.strict = strict

    def require(self, condition: bool, message: str) -> bool:
        """Check a precondition.

        Args:
            condition: The precondition.
            message: Description used for the exception or log line.

        Returns:
            True if the condition holds, False if it failed in tolerant mode.

        Raises:
            ContractViolation: If the condition fails in strict mode.
        """
        if condition:
            return True
        if self.strict:
            raise ContractViolation(message)
        logger.warning("Contract violation: %s", message)
        return False

    def warn(self, condition: bool, message: str) -> None:
        """Log a warning when a suspicious but legal call is made."""
        if not condition:
            logger.warning(message)
