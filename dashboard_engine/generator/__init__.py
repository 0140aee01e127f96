"""Template generation package — seeded layouts and startup registries.

Modules:
    seeded: Deterministic ten-variation pools from an industry name
    registry: KPI config registry and template variation store
"""

from .registry import (
    IndustryConfigRegistry,
    Registry,
    TemplateVariationStore,
    is_default_template,
    parse_template_index,
)
from .seeded import generate_industry_templates, industry_seed

__all__ = [
    "IndustryConfigRegistry",
    "Registry",
    "TemplateVariationStore",
    "generate_industry_templates",
    "industry_seed",
    "is_default_template",
    "parse_template_index",
]
