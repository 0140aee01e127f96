"""QA validation package for the dashboard engine.

Validates template pools (pool size, variation size, hero placement) and
checks that resolved charts only reference real dataset columns.
"""

from .validator import (
    Issue,
    QAResult,
    QAValidator,
    check_charts,
    check_pool,
)

__all__ = [
    "Issue",
    "QAResult",
    "QAValidator",
    "check_charts",
    "check_pool",
]
