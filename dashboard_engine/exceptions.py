"""Exceptions raised by the dashboard engine.

Resolution never raises; these only surface while loading override
configuration at startup.
"""


class DashboardEngineError(Exception):
    """Base exception for the dashboard engine."""
    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class OverrideConfigError(DashboardEngineError):
    """Raised when an industry override bundle cannot be loaded."""
    pass
