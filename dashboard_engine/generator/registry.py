"""Startup-built registries for industry KPIs and template pools.

Both registries merge the built-in catalogues with optional override
bundles once, at construction, and are read-only afterwards.  Lookups
accept free-text industry identifiers and never raise.
"""

import copy
import logging

from ..schema.curated_templates import (
    build_crm_templates,
    build_finance_templates,
    build_odoo_templates,
)
from ..schema.industries import IndustryKey, normalize_industry
from ..schema.kpi_catalog import build_industry_configs
from ..schema.loader import IndustryOverride
from ..schema.models import IndustryConfig, KpiDefinition, TemplatePool, TemplateVariation
from .seeded import POOL_SIZE, generate_industry_templates

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_ID = "default"

_CURATED_POOLS = {
    IndustryKey.FINANCE: build_finance_templates,
    IndustryKey.CRM: build_crm_templates,
    IndustryKey.ODOO: build_odoo_templates,
}


# ---------------------------------------------------------------------------
# Template ids
# ---------------------------------------------------------------------------

def is_default_template(template_id: str | None) -> bool:
    """True for ``"default"``: the caller's ad-hoc recommendation path applies."""
    return str(template_id or "").strip().lower() == DEFAULT_TEMPLATE_ID


def parse_template_index(template_id: str | None, pool_size: int = POOL_SIZE) -> int:
    """Turn ``"template<N>"`` into a 0-based index clamped to the pool.

    ``"template3"`` -> 2, ``"template99"`` -> ``pool_size - 1``; anything
    unparsable selects the first variation.
    """
    text = str(template_id or "").strip().lower().replace("template", "", 1)
    try:
        index = int(text) - 1
    except ValueError:
        logger.debug("Unparsable template id %r, using variation 1", template_id)
        return 0
    clamped = max(0, min(index, pool_size - 1))
    if clamped != index:
        logger.debug("Template id %r clamped to variation %d", template_id, clamped + 1)
    return clamped


# ---------------------------------------------------------------------------
# KPI configs
# ---------------------------------------------------------------------------

class IndustryConfigRegistry:
    """Per-industry KPI definitions, built-ins merged with overrides."""

    def __init__(self, overrides: dict[IndustryKey, IndustryOverride] | None = None):
        self._overrides = dict(overrides or {})
        self._configs: dict[IndustryKey, IndustryConfig] = build_industry_configs()

        for key, override in self._overrides.items():
            kpis = override.kpis
            if kpis is None:
                kpis = override.kpis_for_index(0)
            if kpis is None:
                continue
            self._configs[key] = IndustryConfig(
                name=override.name or key.display_name, kpis=list(kpis))
            logger.info("KPI override applied for %s (%d KPIs)", key.value, len(kpis))

    def get_industry_config(self, identifier: "str | IndustryKey | None") -> IndustryConfig | None:
        """Config for the industry, or ``None`` when it ships no KPIs."""
        config = self._configs.get(normalize_industry(identifier))
        return copy.deepcopy(config) if config is not None else None

    def get_kpi_definitions(self, identifier: "str | IndustryKey | None",
                            template_id: str | None = None,
                            pool_size: int = POOL_SIZE) -> list[KpiDefinition]:
        """KPI list for one variation of an industry's dashboard.

        Per-variation ``templateKpis`` from an override win over the flat
        list; an industry with neither gets ``[]``.  *pool_size* is the
        length of the industry's template pool, which bounds the index.
        """
        key = normalize_industry(identifier)
        override = self._overrides.get(key)
        if override is not None and override.template_kpis:
            index = parse_template_index(template_id, pool_size)
            return copy.deepcopy(override.kpis_for_index(index) or [])
        config = self._configs.get(key)
        return copy.deepcopy(config.kpis) if config is not None else []


# ---------------------------------------------------------------------------
# Template pools
# ---------------------------------------------------------------------------

def _builtin_pool(key: IndustryKey) -> TemplatePool:
    builder = _CURATED_POOLS.get(key)
    if builder is None:
        return generate_industry_templates(key.display_name)
    pool = builder()
    if len(pool) < POOL_SIZE:
        # Curated sets shorter than a full pool are topped up from the generator
        generated = generate_industry_templates(key.display_name)
        pool.extend(generated[len(pool):])
    return pool


class TemplateVariationStore:
    """Ten-variation template pools per industry."""

    def __init__(self, overrides: dict[IndustryKey, IndustryOverride] | None = None):
        self._pools: dict[IndustryKey, TemplatePool] = {
            key: _builtin_pool(key) for key in IndustryKey
        }
        for key, override in (overrides or {}).items():
            if override.templates:
                self._pools[key] = [list(v) for v in override.templates]
                logger.info("Template override applied for %s (%d variations)",
                            key.value, len(override.templates))

    def get_template_pool(self, identifier: "str | IndustryKey | None") -> TemplatePool:
        return copy.deepcopy(self._pools[normalize_industry(identifier)])

    def get_template_variation(self, identifier: "str | IndustryKey | None",
                               template_id: str | None) -> TemplateVariation:
        """One variation of the industry's pool; never raises."""
        pool = self._pools[normalize_industry(identifier)]
        index = parse_template_index(template_id, len(pool))
        return copy.deepcopy(pool[index])

    def get_template_count(self, identifier: "str | IndustryKey | None") -> int:
        return len(self._pools[normalize_industry(identifier)])


# ---------------------------------------------------------------------------
# Combined registry
# ---------------------------------------------------------------------------

class Registry:
    """KPI configs and template pools built from one set of overrides."""

    def __init__(self, overrides: dict[IndustryKey, IndustryOverride] | None = None):
        self.configs = IndustryConfigRegistry(overrides)
        self.templates = TemplateVariationStore(overrides)

    def get_industry_config(self, identifier):
        return self.configs.get_industry_config(identifier)

    def get_kpi_definitions(self, identifier, template_id=None):
        return self.configs.get_kpi_definitions(
            identifier, template_id, self.templates.get_template_count(identifier))

    def get_template_pool(self, identifier):
        return self.templates.get_template_pool(identifier)

    def get_template_variation(self, identifier, template_id):
        return self.templates.get_template_variation(identifier, template_id)

    def get_template_count(self, identifier):
        return self.templates.get_template_count(identifier)
