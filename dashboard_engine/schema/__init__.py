"""Dashboard schema package — typed models and built-in catalogues.

Provides the contract between the registry, the resolvers and the
rendering layer:

- models.py: Core dataclasses (KpiDefinition, ChartBlueprint, ResolvedChartSpec, etc.)
- industries.py: IndustryKey vocabulary and identifier normalization
- design_system.py: Palettes and KPI value formatting
- kpi_catalog.py: Built-in KPI definitions per industry
- curated_templates.py: Hand-authored finance, CRM and Odoo template pools
- loader.py: YAML override bundles
"""

from .curated_templates import (
    build_crm_templates,
    build_finance_templates,
    build_odoo_templates,
)
from .design_system import (
    PALETTES,
    format_currency,
    format_kpi_value,
    format_number,
)
from .industries import (
    DEFAULT_INDUSTRY,
    IndustryKey,
    industry_key_for,
    is_relationship_industry,
    normalize_industry,
)
from .kpi_catalog import build_industry_configs
from .loader import IndustryOverride, load_override, load_overrides, save_override
from .models import (
    Aggregation,
    ChartBlueprint,
    ChartSize,
    IndustryConfig,
    KpiCard,
    KpiDefinition,
    Priority,
    ResolvedChartSpec,
    SourceMapping,
    TemplatePool,
    TemplateVariation,
)

__all__ = [
    # Models
    "Aggregation",
    "ChartBlueprint",
    "ChartSize",
    "IndustryConfig",
    "KpiCard",
    "KpiDefinition",
    "Priority",
    "ResolvedChartSpec",
    "SourceMapping",
    "TemplatePool",
    "TemplateVariation",
    # Industries
    "DEFAULT_INDUSTRY",
    "IndustryKey",
    "industry_key_for",
    "is_relationship_industry",
    "normalize_industry",
    # Built-in catalogues
    "build_crm_templates",
    "build_finance_templates",
    "build_industry_configs",
    "build_odoo_templates",
    # Loader
    "IndustryOverride",
    "load_override",
    "load_overrides",
    "save_override",
    # Formatting
    "PALETTES",
    "format_currency",
    "format_kpi_value",
    "format_number",
]
