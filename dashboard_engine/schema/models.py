"""Dashboard schema models - the contract between registry, resolvers and renderers.

Defines the typed structure of an industry dashboard: which KPI cards an
industry shows, which chart blueprints make up a template variation, and
what a chart looks like once its semantic roles are bound to real columns.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Aggregation(Enum):
    """How a KPI folds a column into a single value."""
    SUM = "sum"
    AVG = "avg"
    COUNT = "count"      # distinct values, or rows when no column resolves


class Priority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ChartSize(Enum):
    """Layout slot of a chart within a template variation."""
    LARGE = "large"      # the single hero chart
    NORMAL = "normal"


# ---------------------------------------------------------------------------
# KPI definitions
# ---------------------------------------------------------------------------

@dataclass
class KpiDefinition:
    """One KPI card an industry shows, matched to a column by regex."""
    title: str
    key_match: re.Pattern
    aggregation: Aggregation = Aggregation.SUM
    value_prefix: str | None = None      # "$" switches to currency formatting
    value_suffix: str | None = None      # "%", "h", "MWh", ...
    glyph: str = "BarChart3"             # icon token for the card renderer
    style: str = ""                      # style token (background class)

    @property
    def is_currency(self) -> bool:
        return self.value_prefix == "$"

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "title": self.title,
            "keyMatch": self.key_match.pattern,
            "agg": self.aggregation.value,
            "icon": self.glyph,
        }
        if self.style:
            d["bg"] = self.style
        if self.value_prefix:
            d["prefix"] = self.value_prefix
        if self.value_suffix:
            d["suffix"] = self.value_suffix
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "KpiDefinition":
        """Build from an override entry; ``keyMatch`` is a case-insensitive regex."""
        key_match = d["keyMatch"]
        if not isinstance(key_match, re.Pattern):
            key_match = re.compile(str(key_match), re.IGNORECASE)
        return cls(
            title=d["title"],
            key_match=key_match,
            aggregation=Aggregation(d.get("agg", "sum")),
            value_prefix=d.get("prefix"),
            value_suffix=d.get("suffix"),
            glyph=d.get("icon") or "BarChart3",
            style=d.get("bg", ""),
        )


@dataclass
class IndustryConfig:
    """Ordered KPI definitions for one industry."""
    name: str
    kpis: list[KpiDefinition] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "kpis": [k.to_dict() for k in self.kpis]}

    @classmethod
    def from_dict(cls, d: dict) -> "IndustryConfig":
        return cls(
            name=d["name"],
            kpis=[KpiDefinition.from_dict(k) for k in d.get("kpis", [])],
        )


# ---------------------------------------------------------------------------
# Chart blueprints
# ---------------------------------------------------------------------------

@dataclass
class ChartBlueprint:
    """An abstract chart whose axes reference semantic roles, not columns.

    ``x_role`` / ``y_role`` are placeholders such as ``"region"`` or
    ``"sales"``; a list-valued ``y_role`` describes a multi-series chart.
    """
    type: str                            # chart kind, e.g. "bar", "gradient-area"
    title: str
    x_role: str
    y_role: str | list[str]
    x_label: str = ""
    y_label: str = ""
    priority: Priority = Priority.MEDIUM
    size: ChartSize = ChartSize.NORMAL
    palette: list[str] = field(default_factory=list)

    @property
    def is_multi_series(self) -> bool:
        return isinstance(self.y_role, list) and len(self.y_role) > 1

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "title": self.title,
            "x_axis": self.x_role,
            "y_axis": list(self.y_role) if isinstance(self.y_role, list) else self.y_role,
            "x_label": self.x_label,
            "y_label": self.y_label,
            "priority": self.priority.value,
            "size": self.size.value,
            "colorPalette": list(self.palette),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ChartBlueprint":
        y_role = d["y_axis"]
        if isinstance(y_role, (list, tuple)):
            y_role = [str(y) for y in y_role]
        else:
            y_role = str(y_role)
        return cls(
            type=d["type"],
            title=d.get("title", ""),
            x_role=str(d["x_axis"]),
            y_role=y_role,
            x_label=d.get("x_label", ""),
            y_label=d.get("y_label", ""),
            priority=Priority(d.get("priority", "medium")),
            size=ChartSize(d.get("size", "normal")),
            palette=list(d.get("colorPalette", [])),
        )


# A template variation is an ordered list of 4 blueprints (hero first);
# a template pool is the ordered list of variations for one industry.
TemplateVariation = list[ChartBlueprint]
TemplatePool = list[TemplateVariation]


@dataclass
class ResolvedChartSpec:
    """A blueprint whose roles are bound to concrete dataset columns.

    ``resolved`` is False only for the empty-dataset case, where the roles
    are left as semantic placeholders to signal "no data yet".
    """
    type: str
    title: str
    x_role: str
    y_role: str | list[str]
    x_label: str
    y_label: str
    priority: Priority
    size: ChartSize
    palette: list[str]
    resolved: bool = True

    def to_dict(self) -> dict:
        d = {
            "type": self.type,
            "title": self.title,
            "x_axis": self.x_role,
            "y_axis": list(self.y_role) if isinstance(self.y_role, list) else self.y_role,
            "x_label": self.x_label,
            "y_label": self.y_label,
            "priority": self.priority.value,
            "size": self.size.value,
            "colorPalette": list(self.palette),
        }
        if not self.resolved:
            d["resolved"] = False
        return d

    @classmethod
    def from_blueprint(cls, bp: ChartBlueprint, x_role: str,
                       y_role: str | list[str], palette: list[str],
                       resolved: bool = True) -> "ResolvedChartSpec":
        return cls(
            type=bp.type,
            title=bp.title,
            x_role=x_role,
            y_role=y_role,
            x_label=bp.x_label,
            y_label=bp.y_label,
            priority=bp.priority,
            size=bp.size,
            palette=list(palette),
            resolved=resolved,
        )


# ---------------------------------------------------------------------------
# KPI output and data-source mapping
# ---------------------------------------------------------------------------

@dataclass
class KpiCard:
    """A computed KPI ready for the card renderer."""
    title: str
    value: float | int
    formatted_value: str
    glyph: str
    style: str
    prefix: str = ""     # non-currency prefix (currency is already in formatted_value)
    suffix: str = ""

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "title": self.title,
            "value": self.value,
            "formatted_value": self.formatted_value,
            "glyph": self.glyph,
            "style": self.style,
        }
        if self.prefix:
            d["prefix"] = self.prefix
        if self.suffix:
            d["suffix"] = self.suffix
        return d


@dataclass
class SourceMapping:
    """Column hints a data source was configured with."""
    metric_col: str | None = None
    category_col: str | None = None
    date_col: str | None = None

    @classmethod
    def from_dict(cls, d: dict | None) -> "SourceMapping":
        d = d or {}
        return cls(
            metric_col=d.get("metricCol", d.get("metric_col")),
            category_col=d.get("categoryCol", d.get("category_col")),
            date_col=d.get("dateCol", d.get("date_col")),
        )
