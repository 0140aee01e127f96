"""Chart recommendation resolver — a template variation bound to a dataset.

Each blueprint's roles are resolved to real columns, while type, title,
labels, priority and size carry through unchanged.  Manufacturing and HR
dashboards replace blueprint palettes with a rotating three-palette
scheme; every other industry keeps the palette its blueprint ships.
"""

import logging
from dataclasses import dataclass

from ..schema.design_system import BLUE_MONO, GREEN_MONO, MULTI_HUE, TEAL_MONO, VIOLET_MONO
from ..schema.industries import IndustryKey, is_relationship_industry, normalize_industry
from ..schema.models import ResolvedChartSpec, TemplateVariation
from .columns import ColumnRoleResolver
from .dataset import DatasetView

logger = logging.getLogger(__name__)

# Dataset type tags that select the CRM resolution chain
RELATIONSHIP_DATASET_TYPES = {"crm", "sfw crm", "sfw_crm", "odoo", "relationship"}


@dataclass(frozen=True)
class PaletteScheme:
    """Palettes applied by chart position, ``index % len(rotation)``."""
    rotation: tuple[tuple[str, ...], ...]
    multi_series: tuple[str, ...] | None = None    # overrides rotation for multi-series charts

    def palette_for(self, index: int, multi_series: bool = False) -> list[str]:
        if multi_series and self.multi_series is not None:
            return list(self.multi_series)
        return list(self.rotation[index % len(self.rotation)])


PALETTE_SCHEMES: dict[IndustryKey, PaletteScheme] = {
    IndustryKey.MANUFACTURING: PaletteScheme(
        rotation=(tuple(BLUE_MONO), tuple(GREEN_MONO), tuple(VIOLET_MONO)),
    ),
    IndustryKey.HR: PaletteScheme(
        rotation=(tuple(BLUE_MONO), tuple(MULTI_HUE), tuple(TEAL_MONO)),
        multi_series=tuple(MULTI_HUE),
    ),
}


def uses_relationship_chain(industry: IndustryKey, dataset_type: str | None = None) -> bool:
    """CRM chain for CRM-shaped industries or datasets tagged as such."""
    if is_relationship_industry(industry):
        return True
    return bool(dataset_type) and dataset_type.strip().lower() in RELATIONSHIP_DATASET_TYPES


def resolve_charts(variation: TemplateVariation, dataset, industry,
                   dataset_type: str | None = None) -> list[ResolvedChartSpec]:
    """Bind every blueprint of *variation* to columns of *dataset*.

    An empty dataset returns the blueprints with their semantic roles and
    ``resolved=False`` so the renderer can show a "no data yet" state.
    """
    key = normalize_industry(industry)
    view = dataset if isinstance(dataset, DatasetView) else DatasetView(dataset)
    scheme = PALETTE_SCHEMES.get(key)

    if view.is_empty:
        logger.debug("Empty dataset for %s, returning unresolved blueprints", key.value)
        return [
            ResolvedChartSpec.from_blueprint(
                bp, bp.x_role,
                list(bp.y_role) if isinstance(bp.y_role, list) else bp.y_role,
                bp.palette, resolved=False)
            for bp in variation
        ]

    resolver = ColumnRoleResolver(view, relationship=uses_relationship_chain(key, dataset_type))
    charts = []
    for index, bp in enumerate(variation):
        x = resolver.resolve_axis(bp.x_role, "x")
        if isinstance(bp.y_role, list):
            y = resolver.resolve_series(bp.y_role)
        else:
            y = resolver.resolve_axis(bp.y_role, "y")

        palette = bp.palette
        if scheme is not None:
            palette = scheme.palette_for(index, multi_series=isinstance(y, list) and len(y) > 1)
        charts.append(ResolvedChartSpec.from_blueprint(bp, x, y, palette))
    return charts
