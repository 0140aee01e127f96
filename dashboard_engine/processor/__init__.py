"""Data processor module for the dashboard engine."""

from .charts import PALETTE_SCHEMES, PaletteScheme, resolve_charts
from .columns import (
    COUNT_SENTINEL,
    CRM_RULES,
    GENERIC_RULES,
    ColumnRoleResolver,
    RoleRule,
)
from .dataset import DatasetView, load_dataset, to_number
from .kpis import compute_kpi, compute_kpis, default_kpis, resolve_kpi_column
