"""Dashboard template and KPI recommendation engine.

Turns an industry identifier, a template id and a schema-less dataset
into chart specs bound to real columns plus formatted KPI cards.
"""

from .engine import Dashboard, DashboardEngine, DashboardLink, initialize
from .exceptions import DashboardEngineError, OverrideConfigError
from .generator.registry import Registry

__version__ = "0.1.0"

__all__ = [
    "Dashboard",
    "DashboardEngine",
    "DashboardEngineError",
    "DashboardLink",
    "OverrideConfigError",
    "Registry",
    "initialize",
]
