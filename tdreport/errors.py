"""Exceptions raised by tdreport."""

from typing import List, Optional


class TdReportError(Exception):
    """Base class for tdreport errors."""


class TodoistAPIError(TdReportError):
    """A request to the Todoist API failed (transport, auth or server error)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TodoistDecodeError(TodoistAPIError):
    """The Todoist API answered with a body that could not be decoded."""


class ResolutionError(TdReportError):
    """A label or project name given as a filter does not exist."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind.capitalize()} {name!r} not found")
        self.kind = kind
        self.name = name


class HierarchyCycleError(TdReportError):
    """The project parent graph contains a cycle."""

    def __init__(self, cycle: List[str]):
        path = " -> ".join(cycle + cycle[:1])
        super().__init__(f"Project hierarchy contains a cycle: {path}")
        self.cycle = list(cycle)
