"""Dashboard engine facade.

Build the registry once at startup, then resolve dashboards per request:

    registry = initialize("config/industries")
    engine = DashboardEngine(registry)
    dashboard = engine.build("SFW CRM", "template3", rows)

A dashboard is fully determined by ``(industry, template id, dataset)``;
a :class:`DashboardLink` carries the first two so a shared link rebuilds
the same layout against the same data.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import parse_qs, urlencode

from .exceptions import OverrideConfigError
from .generator.registry import Registry, is_default_template, parse_template_index
from .processor.charts import resolve_charts
from .processor.dataset import DatasetView
from .processor.kpis import compute_kpis
from .schema.industries import IndustryKey, industry_key_for, normalize_industry
from .schema.loader import IndustryOverride, load_overrides
from .schema.models import KpiCard, ResolvedChartSpec

logger = logging.getLogger(__name__)


def initialize(overrides: "dict | str | Path | None" = None) -> Registry:
    """Build the process-wide registry.

    *overrides* is either a mapping of industry to :class:`IndustryOverride`
    (keys may be :class:`IndustryKey` or identifiers) or a directory of
    YAML bundles.  Raises :class:`OverrideConfigError` on bad bundles
    and on keys that name no known industry.
    """
    if overrides is None:
        return Registry()
    if isinstance(overrides, (str, Path)):
        loaded = load_overrides(overrides)
    else:
        loaded = {}
        for ident, override in overrides.items():
            if isinstance(override, dict):
                override = IndustryOverride.from_dict(override)
            key = industry_key_for(ident)
            if key is None:
                raise OverrideConfigError("Override does not name a known industry",
                                          {"industry": ident})
            loaded[key] = override
    logger.info("Initializing registry with %d override(s)", len(loaded))
    return Registry(loaded)


@dataclass
class Dashboard:
    """Resolved charts and KPI cards for one dashboard view."""
    industry_key: IndustryKey
    template_id: str
    charts: list[ResolvedChartSpec] = field(default_factory=list)
    kpis: list[KpiCard] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return any(c.resolved for c in self.charts)

    def to_dict(self) -> dict:
        return {
            "industry": self.industry_key.value,
            "template": self.template_id,
            "charts": [c.to_dict() for c in self.charts],
            "kpis": [k.to_dict() for k in self.kpis],
        }


@dataclass(frozen=True)
class DashboardLink:
    """The shareable part of a dashboard: industry and template id."""
    industry: str
    template_id: str = "template1"

    def to_query(self) -> str:
        return urlencode({"industry": self.industry, "template": self.template_id})

    @classmethod
    def from_query(cls, query: str) -> "DashboardLink":
        params = parse_qs(query.lstrip("?"))
        industry = params.get("industry", [""])[0]
        template_id = params.get("template", ["template1"])[0]
        return cls(industry, template_id)


class DashboardEngine:
    """Resolves template charts and KPI cards against a dataset."""

    def __init__(self, registry: Registry | None = None):
        self.registry = registry or Registry()

    def charts(self, industry, template_id, dataset,
               dataset_type: str | None = None) -> list[ResolvedChartSpec]:
        if is_default_template(template_id):
            return []
        variation = self.registry.get_template_variation(industry, template_id)
        return resolve_charts(variation, dataset, industry, dataset_type)

    def kpis(self, industry, template_id, dataset, mapping=None) -> list[KpiCard]:
        return compute_kpis(self.registry, industry, template_id, dataset, mapping)

    def build(self, industry, template_id, dataset, dataset_type: str | None = None,
              mapping=None) -> Dashboard:
        key = normalize_industry(industry)
        view = dataset if isinstance(dataset, DatasetView) else DatasetView(dataset)
        template_id = template_id or "template1"
        if not is_default_template(template_id):
            index = parse_template_index(template_id, self.registry.get_template_count(key))
            template_id = f"template{index + 1}"
        return Dashboard(
            industry_key=key,
            template_id=template_id,
            charts=self.charts(industry, template_id, view, dataset_type),
            kpis=self.kpis(industry, template_id, view, mapping),
        )

    def build_from_link(self, link: DashboardLink, dataset,
                        dataset_type: str | None = None, mapping=None) -> Dashboard:
        return self.build(link.industry, link.template_id, dataset, dataset_type, mapping)

    def template_count(self, industry) -> int:
        return self.registry.get_template_count(industry)
