"""KPI resolver — fold a dataset into the KPI cards of an industry dashboard.

Each KPI definition finds its column by ``keyMatch`` against the column
names; when nothing matches, an aggregation-specific fallback picks one:

    sum / avg  mapped metric column (currency or revenue KPIs only)
               -> financial-looking numeric column (currency, revenue, cost KPIs)
               -> first numeric column that is not an id or date part
    count      mapped category column
               -> first id/name-like column -> first text column
               -> no column: the row count

Industries without KPI definitions get a generic five-card set.
"""

import logging
import re

from ..schema.design_system import format_currency, format_kpi_value, format_number
from ..schema.industries import normalize_industry
from ..schema.models import Aggregation, KpiCard, KpiDefinition, SourceMapping
from .dataset import DatasetView

logger = logging.getLogger(__name__)

_FINANCIAL = re.compile(r"sales|revenue|amount|price|cost|value|total", re.IGNORECASE)
_DATE_PART = re.compile(r"id|year|month|day|date", re.IGNORECASE)
_ENTITY = re.compile(r"id|name|title|product|customer|email", re.IGNORECASE)

# Generic card set
_SALES = re.compile(r"sales|total|amount|revenue|price", re.IGNORECASE)
_BRAND = re.compile(r"brand|company|vendor|vender|manufacturer", re.IGNORECASE)
_PRODUCT = re.compile(r"product|item|description|name", re.IGNORECASE)
_QUANTITY = re.compile(r"qty|quantity|count|unit", re.IGNORECASE)


def _first(columns, pattern: re.Pattern) -> str | None:
    return next((c for c in columns if pattern.search(c)), None)


# ---------------------------------------------------------------------------
# Column resolution
# ---------------------------------------------------------------------------

def resolve_kpi_column(definition: KpiDefinition, view: DatasetView,
                       mapping: SourceMapping | None = None) -> str | None:
    """Column a KPI aggregates, or ``None`` when nothing fits."""
    mapping = mapping or SourceMapping()
    columns = view.columns
    matched = _first(columns, definition.key_match)
    if matched is not None:
        return matched

    title = definition.title.lower()
    if definition.aggregation in (Aggregation.SUM, Aggregation.AVG):
        money_like = definition.is_currency or "revenue" in title
        if money_like and view.has_column(mapping.metric_col):
            return mapping.metric_col
        if money_like or "cost" in title:
            col = next((c for c in columns
                        if _FINANCIAL.search(c) and c in view.numeric_columns), None)
            if col is not None:
                return col
        return next((c for c in view.numeric_columns if not _DATE_PART.search(c)), None)

    if view.has_column(mapping.category_col):
        return mapping.category_col
    col = _first(columns, _ENTITY)
    if col is None and view.textual_columns:
        col = view.textual_columns[0]
    return col


def _aggregate(definition: KpiDefinition, view: DatasetView, col: str | None) -> float | int:
    if col is None:
        return len(view) if definition.aggregation is Aggregation.COUNT else 0
    if definition.aggregation is Aggregation.COUNT:
        return view.distinct_count(col)
    if definition.aggregation is Aggregation.AVG:
        return view.average(col)
    return view.sum(col)


def compute_kpi(definition: KpiDefinition, view: DatasetView,
                mapping: SourceMapping | None = None) -> KpiCard:
    prefix = "" if definition.is_currency else (definition.value_prefix or "")
    suffix = definition.value_suffix or ""
    if view.is_empty:
        return KpiCard(definition.title, 0, "0", definition.glyph, definition.style,
                       prefix, suffix)

    col = resolve_kpi_column(definition, view, mapping)
    if col is None:
        logger.debug("KPI %r found no column", definition.title)
    value = _aggregate(definition, view, col)
    return KpiCard(
        title=definition.title,
        value=value,
        formatted_value=format_kpi_value(value, definition),
        glyph=definition.glyph,
        style=definition.style,
        prefix=prefix,
        suffix=suffix,
    )


# ---------------------------------------------------------------------------
# Generic card set
# ---------------------------------------------------------------------------

def default_kpis(view: DatasetView, mapping: SourceMapping | None = None) -> list[KpiCard]:
    """Five generic cards for industries that define no KPIs."""
    mapping = mapping or SourceMapping()
    rows = len(view)
    if view.is_empty:
        totals = {"sales": 0, "entities": 0, "items": 0, "units": 0}
        labels = {k: "0" for k in totals}
    else:
        columns = view.columns
        sales_col = mapping.metric_col if view.has_column(mapping.metric_col) else _first(columns, _SALES)
        brand_col = mapping.category_col if view.has_column(mapping.category_col) else _first(columns, _BRAND)
        product_col = _first(columns, _PRODUCT)
        quantity_col = _first(columns, _QUANTITY)

        total_sales = view.sum(sales_col) if sales_col else 0
        entities = view.distinct_count(brand_col) if brand_col else 0
        items = view.distinct_count(product_col) if product_col else rows
        units = (view.sum(quantity_col) if quantity_col else 0) or rows
        totals = {"sales": total_sales, "entities": entities, "items": items, "units": units}
        labels = {
            "sales": format_currency(total_sales),
            "entities": str(entities) if entities else "N/A",
            "items": format_number(items),
            "units": format_number(units),
        }

    return [
        KpiCard("Total Sales", totals["sales"], labels["sales"], "DollarSign",
                "bg-gradient-to-br from-pink-500 to-rose-500"),
        KpiCard("Unique Entities", totals["entities"], labels["entities"], "Layers",
                "bg-gradient-to-br from-amber-400 to-orange-500"),
        KpiCard("Items Analyzed", totals["items"], labels["items"], "Package",
                "bg-gradient-to-br from-teal-400 to-emerald-600"),
        KpiCard("Total Units", totals["units"], labels["units"], "Zap",
                "bg-gradient-to-br from-green-400 to-emerald-600"),
        KpiCard("Data Rows", rows, str(rows), "History",
                "bg-gradient-to-br from-purple-500 to-indigo-700"),
    ]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def compute_kpis(registry, industry, template_id, dataset,
                 mapping: SourceMapping | dict | None = None) -> list[KpiCard]:
    """KPI cards for one variation of an industry dashboard; never raises."""
    key = normalize_industry(industry)
    view = dataset if isinstance(dataset, DatasetView) else DatasetView(dataset)
    if not isinstance(mapping, SourceMapping):
        mapping = SourceMapping.from_dict(mapping)

    definitions = registry.get_kpi_definitions(key, template_id)
    if not definitions:
        logger.debug("No KPI definitions for %s, using the generic card set", key.value)
        return default_kpis(view, mapping)
    return [compute_kpi(d, view, mapping) for d in definitions]
