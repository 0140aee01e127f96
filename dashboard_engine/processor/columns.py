"""Column role resolver — bind semantic chart roles to real dataset columns.

Blueprints speak in roles ("region", "sales", "lead_status"); datasets
arrive with whatever column names the source uses.  Resolution walks an
ordered rule table:

    exact column names -> name regexes -> typed fallback -> terminal fallback

Two tables exist.  ``CRM_RULES`` targets SFW CRM / Odoo exports, where the
expected field names are known and tried literally first.  ``GENERIC_RULES``
targets arbitrary tabular data, where numeric roles only consider columns
whose sampled values are numbers.

Whatever the chain produces is checked against the column inventory; a
miss is replaced by the terminal fallback, so a resolved role always
names an existing column (or the ``_count_`` row-count sentinel on y).
"""

import logging
import re
from dataclasses import dataclass

from .dataset import DatasetView

logger = logging.getLogger(__name__)

COUNT_SENTINEL = "_count_"

NUMERIC = "numeric"
TEXTUAL = "textual"

# Typed fallback arms
MAIN = "main"        # first column of the rule's kind
SECOND = "second"    # second numeric column, else the first
COUNT = "count"      # row-count sentinel


@dataclass(frozen=True)
class RoleRule:
    """How one semantic role is looked up in a dataset."""
    role: str
    kind: str = TEXTUAL
    exact: tuple[str, ...] = ()
    patterns: tuple[re.Pattern, ...] = ()
    numeric_only: bool = False
    fallback: str = MAIN


def _re(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def _table(*rules: RoleRule) -> dict[str, RoleRule]:
    return {r.role: r for r in rules}


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

CRM_RULES = _table(
    # Leads
    RoleRule("lead_status", exact=("lead_status",), patterns=_re(r"lead_status|status")),
    RoleRule("lead_source", exact=("lead_source",), patterns=_re(r"lead_source|source")),
    RoleRule("lead_stage", exact=("lead_stage",), patterns=_re(r"lead_stage|stage")),
    RoleRule("lead_owner", exact=("lead_owner",), patterns=_re(r"lead_owner|owner|sales_owner")),
    RoleRule("est_value", NUMERIC, exact=("est_value",), patterns=_re(r"est_value|value|amount|total")),
    RoleRule("industry", exact=("industry",)),
    # Customers
    RoleRule("contact_type", exact=("contact_type",), patterns=_re(r"contact_type|type")),
    RoleRule("source", exact=("source",), patterns=_re(r"source|lead_source")),
    RoleRule("status", exact=("status",), patterns=_re(r"status|lead_status")),
    RoleRule("country", exact=("country",)),
    RoleRule("state", exact=("state",)),
    RoleRule("city", exact=("city",)),
    # Companies
    RoleRule("total_value", NUMERIC, exact=("total_value",), patterns=_re(r"total_value|value|est_value")),
    RoleRule("contact_count", NUMERIC, exact=("contact_count",), patterns=_re(r"contact_count|count")),
    RoleRule("size", exact=("size",)),
    RoleRule("revenue", exact=("revenue",)),      # a revenue range label, not an amount
    RoleRule("name", exact=("name", "lead_name", "company_name")),
    # Activity logs
    RoleRule("action", exact=("action",)),
    RoleRule("performed_by", exact=("performed_by",), patterns=_re(r"performed_by|user|owner")),
    RoleRule("details", exact=("details",)),
    RoleRule("created_at", exact=("created_at",), patterns=_re(r"created_at|date|time")),
    # Products and quotations
    RoleRule("category_name", exact=("category_name",), patterns=_re(r"category")),
    RoleRule("base_price", NUMERIC, exact=("base_price",), patterns=_re(r"price|cost")),
    RoleRule("total_amount", NUMERIC, exact=("total_amount",), patterns=_re(r"total|amount")),
    # Generic measures
    RoleRule("count", NUMERIC, fallback=COUNT),
    RoleRule("rate", NUMERIC, patterns=_re(r"rate|percentage|score")),
    RoleRule("score", NUMERIC, patterns=_re(r"score|rating")),
    RoleRule("value", NUMERIC, patterns=_re(r"value|amount|total|est_value")),
)

GENERIC_RULES = _table(
    # Measures: only numeric columns are candidates
    RoleRule("sales", NUMERIC, patterns=_re(r"sales|revenue|amount|income"), numeric_only=True),
    RoleRule("profit", NUMERIC, patterns=_re(r"profit|net|margin|ebitda"), numeric_only=True, fallback=SECOND),
    RoleRule("cost", NUMERIC, patterns=_re(r"cost|expense|spend|overhead"), numeric_only=True, fallback=SECOND),
    RoleRule("count", NUMERIC, patterns=_re(r"count|qty|quantity|headcount|req"), numeric_only=True,
             fallback=SECOND),
    RoleRule("rate", NUMERIC, patterns=_re(r"rate|ratio|percentage|churn|attrition|occupancy|cvr|roi", r"%"),
             numeric_only=True, fallback=SECOND),
    RoleRule("score", NUMERIC, patterns=_re(r"score|rating|index|nps|csat|quality"), numeric_only=True,
             fallback=SECOND),
    RoleRule("time", NUMERIC, patterns=_re(r"time|days|hours|minutes|duration|period|tenure|lead"),
             numeric_only=True, fallback=SECOND),
    RoleRule("value", NUMERIC),
    RoleRule("volume", NUMERIC, patterns=_re(r"volume|units|qty|quantity|load"), numeric_only=True,
             fallback=SECOND),
    RoleRule("growth", NUMERIC, patterns=_re(r"growth|change|delta|yoy|mom"), numeric_only=True,
             fallback=SECOND),
    RoleRule("efficiency", NUMERIC, patterns=_re(r"efficien|utili[sz]ation|productivity|yield|output"),
             numeric_only=True, fallback=SECOND),
    # Dimensions
    RoleRule("date", patterns=_re(r"date|time|day|period|month|year")),
    RoleRule("category", patterns=_re(r"category|type|group|status|segment|sector")),
    RoleRule("region", patterns=_re(r"region|city|state|location|market|country")),
    RoleRule("product", patterns=_re(r"product|item|sku|description")),
    RoleRule("department", patterns=_re(r"department|dept|division|team")),
    RoleRule("vendor", patterns=_re(r"vendor|supplier|manufacturer|brand")),
    RoleRule("source", patterns=_re(r"source|channel|platform")),
    RoleRule("segment", patterns=_re(r"segment|tier|cohort|class")),
    RoleRule("status", patterns=_re(r"status|stage|phase")),
    RoleRule("channel", patterns=_re(r"channel|platform|medium")),
)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class ColumnRoleResolver:
    """Resolve roles against one dataset using the CRM or generic rule table."""

    def __init__(self, dataset, relationship: bool = False):
        self.dataset = dataset if isinstance(dataset, DatasetView) else DatasetView(dataset)
        self.relationship = relationship
        self.rules = CRM_RULES if relationship else GENERIC_RULES

    # -- fallbacks ---------------------------------------------------------

    def terminal_fallback(self, kind: str) -> str | None:
        """Never-missing default: first column of the kind, else the row count."""
        if kind == NUMERIC:
            return self.dataset.main_numeric or COUNT_SENTINEL
        return self.dataset.main_textual

    def _typed_fallback(self, rule: RoleRule, kind: str) -> str | None:
        if rule.fallback == COUNT:
            return COUNT_SENTINEL
        if rule.fallback == SECOND:
            return self.dataset.second_numeric
        return self.terminal_fallback(kind)

    # -- resolution --------------------------------------------------------

    def resolve(self, role: str, kind: str | None = None) -> str | None:
        """Resolve *role* to a column name or ``_count_``.

        *kind* overrides the rule's own kind for the fallback arm; roles
        missing from the table take it as their kind outright.
        """
        columns = self.dataset.columns
        rule = self.rules.get(str(role).lower())
        if rule is None:
            if role in columns:
                return role
            return self.terminal_fallback(kind or TEXTUAL)

        for name in rule.exact:
            if name in columns:
                return name
        candidates = self.dataset.numeric_columns if rule.numeric_only else columns
        for pattern in rule.patterns:
            for col in candidates:
                if pattern.search(col):
                    return col

        resolved = self._typed_fallback(rule, kind or rule.kind)
        logger.debug("Role %r matched no column, falling back to %r", role, resolved)
        if resolved is None:
            return self.terminal_fallback(kind or rule.kind)
        return resolved

    def resolve_axis(self, role: str, axis: str) -> str | None:
        """Resolve a blueprint axis and enforce the inventory guard.

        On ``x`` the role ``time`` means the date dimension and the row-count
        sentinel is never accepted; on ``y`` fallbacks are numeric.
        """
        if axis == "x":
            if str(role).lower() == "time":
                role = "date"
            resolved = self.resolve(role)
            if resolved in self.dataset.columns:
                return resolved
            fallback = self.terminal_fallback(TEXTUAL)
        else:
            resolved = self.resolve(role, NUMERIC)
            if resolved in self.dataset.columns or resolved == COUNT_SENTINEL:
                return resolved
            fallback = self.terminal_fallback(NUMERIC)
        logger.debug("Resolved %s-axis %r to missing column %r, using %r",
                      axis, role, resolved, fallback)
        return fallback

    def resolve_series(self, roles: list[str]) -> list[str]:
        """Resolve a multi-series y axis, dropping roles with no real column."""
        series = []
        for role in roles:
            resolved = self.resolve(role, NUMERIC)
            if resolved in self.dataset.columns:
                series.append(resolved)
        if not series:
            series = [self.terminal_fallback(NUMERIC)]
        return series

    def column_map(self, roles) -> dict[str, str | None]:
        """ColumnMap for a set of roles."""
        return {role: self.resolve(role) for role in roles}
