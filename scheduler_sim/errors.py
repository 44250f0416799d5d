from __future__ import annotations

from typing import Optional


class SchedulerError(Exception):
    """Base class for everything this package raises on purpose."""


class InvalidInputError(SchedulerError, ValueError):
    """Raised by the engine when there is nothing to schedule."""


class UnknownAlgorithmError(SchedulerError, ValueError):
    pass


class WorkloadFormatError(SchedulerError, ValueError):
    pass


class ValidationError(SchedulerError, ValueError):
    """
    A user-facing input problem, keyed by the offending process id when there is one.
    """

    def __init__(self, message: str, pid: Optional[str] = None) -> None:
        super().__init__(message)
        self.pid = pid
        self.message = message
