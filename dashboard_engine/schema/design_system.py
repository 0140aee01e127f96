"""Design system utilities — chart palettes and KPI value formatting.

Formatting rules for KPI cards:
- Currency: <$1k=$XXX, then compact $X.XK / $XXK / $X.XM / $XXM / $X.XB
- Numbers: <=1k=XXX, then X.XK / X.XM (one decimal)
- Any configured suffix ("%", "h", "MWh") is appended to numbers
"""

import math

from .models import KpiDefinition


# ---------------------------------------------------------------------------
# Palettes
# ---------------------------------------------------------------------------

PALETTES: list[list[str]] = [
    ["#12FFCC", "#A855F7", "#D946EF", "#8B5CF6", "#EC4899"],
    ["#3B82F6", "#6366F1", "#8B5CF6", "#D946EF", "#EC4899"],
    ["#10B981", "#059669", "#34D399", "#6EE7B7", "#A7F3D0"],
    ["#F59E0B", "#FBBF24", "#D97706", "#B45309", "#78350F"],
    ["#6366F1", "#4F46E5", "#4338CA", "#3730A3", "#312E81"],
    ["#EC4899", "#DB2777", "#BE185D", "#9D174D", "#831843"],
    ["#14B8A6", "#0D9488", "#0F766E", "#115E59", "#134E4A"],
    ["#8B5CF6", "#A78BFA", "#7C3AED", "#6D28D9", "#5B21B6"],
]

BLUE_MONO = ["#3B82F6", "#60A5FA", "#93C5FD", "#BFDBFE", "#DBEAFE"]
GREEN_MONO = ["#10B981", "#34D399", "#6EE7B7", "#A7F3D0", "#D1FAE5"]
VIOLET_MONO = ["#8B5CF6", "#A78BFA", "#C4B5FD", "#DDD6FE", "#EDE9FE"]
TEAL_MONO = ["#14B8A6", "#2DD4BF", "#5EEAD4", "#99F6E4", "#CCFBF1"]
MULTI_HUE = ["#3B82F6", "#EC4899", "#10B981", "#F59E0B", "#8B5CF6"]


# ---------------------------------------------------------------------------
# Value formatting
# ---------------------------------------------------------------------------

_COMPACT_TIERS = [
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
]


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def format_currency(value: float | int | None) -> str:
    """Format a dollar value in compact notation.

    <$1k      -> $XXX
    <10 units -> $X.XK / $X.XM (trailing .0 dropped)
    otherwise -> $XXK / $XXXM
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "N/A"
    v = abs(value)
    sign = "-" if value < 0 else ""
    if _round_half_up(v) < 1_000:
        return f"{sign}${_round_half_up(v)}"
    for i, (div, unit) in enumerate(_COMPACT_TIERS):
        if v < div and i < len(_COMPACT_TIERS) - 1:
            continue
        scaled = v / div
        if scaled < 10:
            formatted = f"{scaled:.1f}"
            if formatted.endswith(".0"):
                formatted = formatted[:-2]
        else:
            formatted = str(_round_half_up(scaled))
        # $999.96K rounds up into the next tier
        if formatted == "1000" and i > 0:
            div, unit = _COMPACT_TIERS[i - 1]
            formatted = "1"
        return f"{sign}${formatted}{unit}"
    return f"{sign}${_round_half_up(v)}"


def format_number(value: float | int | None) -> str:
    """Format a plain KPI number.

    <=1k    -> XXX (rounded)
    1k-1m   -> X.XK
    1m+     -> X.XM
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "N/A"
    v = abs(value)
    sign = "-" if value < 0 else ""
    if v <= 1_000:
        return f"{sign}{_round_half_up(v)}"
    if v < 999_950:
        return f"{sign}{v / 1_000:.1f}K"
    return f"{sign}{v / 1_000_000:.1f}M"


def format_kpi_value(value: float | int, definition: KpiDefinition) -> str:
    """Format an aggregated KPI value according to its definition."""
    if definition.is_currency:
        return format_currency(value)
    return format_number(value) + (definition.value_suffix or "")
