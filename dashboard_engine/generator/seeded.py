"""Seeded template generator — ten default variations for any industry name.

Every industry without a curated pool gets its layouts from here.  The
output is a pure function of the name string: the same name always
yields the same ten variations, so a shared ``(industry, template)`` link
keeps reproducing the layout it was shared with.

The seed is the sum of the name's code points.  Anagrams collide; that is
a known limitation kept for link stability.
"""

from ..schema.design_system import PALETTES
from ..schema.models import ChartBlueprint, ChartSize, Priority, TemplatePool, TemplateVariation

POOL_SIZE = 10

HERO_KINDS = ["gradient-area", "bar", "line", "mixed-line-bar", "scatter"]

SMALL_KINDS = [
    "polar-bar", "pictorialBar", "dotted-bar", "radar", "gauge",
    "funnel", "pie", "doughnut", "waterfall", "boxplot", "bar", "line",
]

DIMENSIONS = ["Category", "Region", "Time", "Product", "Segment",
              "Status", "Channel", "Source", "Department", "Vendor"]

METRICS = ["Sales", "Profit", "Cost", "Count", "Volume",
           "Rate", "Score", "Value", "Growth", "Efficiency"]

LABEL_MAP = {
    "category": "Product Category",
    "region": "Geographic Region",
    "time": "Time Period",
    "product": "Product Name",
    "segment": "Customer Segment",
    "status": "Workflow Status",
    "channel": "Sales Channel",
    "source": "Lead Source",
    "department": "Department Name",
    "vendor": "Vendor Name",
    "sales": "Total Revenue ($)",
    "profit": "Net Profit ($)",
    "cost": "Operating Cost ($)",
    "count": "Transaction Count",
    "volume": "Volume (Units)",
    "rate": "Rate (%)",
    "score": "Performance Score",
    "value": "Total Value ($)",
    "growth": "Growth Rate (%)",
    "efficiency": "Efficiency Index",
}

# Slot offsets of the three small charts: (dimension/metric, small kind)
_SMALL_SLOTS = [(1, 0), (2, 3), (3, 5)]


def industry_seed(name: str) -> int:
    """Sum of the Unicode code points of *name*."""
    return sum(ord(ch) for ch in name)


def label_for(word: str) -> str:
    """Axis label for a vocabulary word, e.g. ``"Sales"`` -> ``"Total Revenue ($)"``."""
    return LABEL_MAP.get(word.lower(), word[:1].upper() + word[1:])


def _blueprint(kind: str, title: str, dim: str, metric: str, palette: list[str],
               hero: bool = False) -> ChartBlueprint:
    return ChartBlueprint(
        type=kind,
        title=title,
        x_role=dim.lower(),
        y_role=metric.lower(),
        x_label=label_for(dim),
        y_label=label_for(metric),
        priority=Priority.HIGH if hero else Priority.MEDIUM,
        size=ChartSize.LARGE if hero else ChartSize.NORMAL,
        palette=list(palette),
    )


def generate_variation(industry: str, index: int) -> TemplateVariation:
    """Build variation *index* (0-based) of *industry*'s generated pool."""
    seed = industry_seed(industry)
    hero_kind = HERO_KINDS[(seed + index * 7) % len(HERO_KINDS)]
    small_offset = seed + index * 3
    dim_offset = seed + index * 5
    metric_offset = seed + index * 2
    palette = PALETTES[(seed + index) % len(PALETTES)]

    dim = DIMENSIONS[dim_offset % len(DIMENSIONS)]
    metric = METRICS[metric_offset % len(METRICS)]
    charts = [
        _blueprint(hero_kind, f"{industry} {label_for(metric)} Analysis ({hero_kind})",
                   dim, metric, palette, hero=True),
    ]

    for slot, (shift, kind_shift) in enumerate(_SMALL_SLOTS):
        kind = SMALL_KINDS[(small_offset + kind_shift) % len(SMALL_KINDS)]
        dim = DIMENSIONS[(dim_offset + shift) % len(DIMENSIONS)]
        metric = METRICS[(metric_offset + shift) % len(METRICS)]
        if slot == 0:
            title = f"{label_for(dim)} Breakdown"
        elif slot == 1:
            title = f"{label_for(metric)} Metrics"
        else:
            title = f"{industry} Distribution"
        charts.append(_blueprint(kind, title, dim, metric, palette))
    return charts


def generate_industry_templates(industry: str) -> TemplatePool:
    """Ten variations for *industry*, identical on every call."""
    return [generate_variation(industry, i) for i in range(POOL_SIZE)]
