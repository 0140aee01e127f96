"""Override loader — YAML bundles that replace built-in KPIs and templates.

One file per industry, reviewed and version-controlled alongside the
deployment:

    key: hr                      # optional, defaults to the file stem
    name: People Analytics
    kpis: [...]                  # replaces the built-in KPI list
    templateKpis:                # per-variation KPI lists, "0" is the default
      "0": [...]
    templates: [[...], ...]      # replaces the template pool verbatim

JSON bundles load too, since YAML is a superset.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import yaml

from ..exceptions import OverrideConfigError
from .industries import IndustryKey, industry_key_for
from .models import ChartBlueprint, KpiDefinition, TemplatePool

logger = logging.getLogger(__name__)

_SUFFIXES = (".yaml", ".yml", ".json")


@dataclass
class IndustryOverride:
    """Externally supplied KPI and template data for one industry."""
    name: str
    kpis: list[KpiDefinition] | None = None
    template_kpis: dict[str, list[KpiDefinition]] | None = None
    templates: TemplatePool | None = None

    def kpis_for_index(self, index: int) -> list[KpiDefinition] | None:
        """Per-variation KPIs, falling back to entry ``"0"``."""
        if not self.template_kpis:
            return None
        return self.template_kpis.get(str(index)) or self.template_kpis.get("0")

    def to_dict(self) -> dict:
        d: dict = {"name": self.name}
        if self.kpis is not None:
            d["kpis"] = [k.to_dict() for k in self.kpis]
        if self.template_kpis is not None:
            d["templateKpis"] = {
                idx: [k.to_dict() for k in kpis]
                for idx, kpis in self.template_kpis.items()
            }
        if self.templates is not None:
            d["templates"] = [[bp.to_dict() for bp in variation]
                              for variation in self.templates]
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "IndustryOverride":
        """Parse a bundle, raising :class:`OverrideConfigError` on bad entries."""
        name = str(d.get("name", ""))
        kpis = None
        if d.get("kpis") is not None:
            kpis = _parse_kpis(d["kpis"], name)

        template_kpis = None
        if d.get("templateKpis") is not None:
            raw = d["templateKpis"]
            if not isinstance(raw, dict):
                raise OverrideConfigError(
                    "templateKpis must be a mapping of variation index to KPI list",
                    {"industry": name},
                )
            template_kpis = {str(idx): _parse_kpis(entries, name)
                             for idx, entries in raw.items()}

        templates = None
        if d.get("templates") is not None:
            templates = _parse_templates(d["templates"], name)

        return cls(name=name, kpis=kpis, template_kpis=template_kpis,
                   templates=templates)


# ---------------------------------------------------------------------------
# Entry parsing
# ---------------------------------------------------------------------------

def _parse_kpis(entries, industry: str) -> list[KpiDefinition]:
    if not isinstance(entries, list):
        raise OverrideConfigError("KPI entries must be a list",
                                  {"industry": industry})
    kpis = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or "title" not in entry or "keyMatch" not in entry:
            raise OverrideConfigError(
                "KPI entry needs at least 'title' and 'keyMatch'",
                {"industry": industry, "index": i},
            )
        try:
            kpis.append(KpiDefinition.from_dict(entry))
        except re.error as e:
            raise OverrideConfigError(
                f"Invalid keyMatch regex for KPI '{entry['title']}': {e}",
                {"industry": industry, "keyMatch": entry["keyMatch"]},
            ) from e
        except ValueError as e:
            raise OverrideConfigError(
                f"Unknown aggregation for KPI '{entry['title']}': {entry.get('agg')}",
                {"industry": industry, "agg": entry.get("agg")},
            ) from e
    return kpis


def _parse_templates(variations, industry: str) -> TemplatePool:
    if not isinstance(variations, list) or not variations:
        raise OverrideConfigError("templates must be a non-empty list of variations",
                                  {"industry": industry})
    pool: TemplatePool = []
    for v_idx, variation in enumerate(variations):
        if not isinstance(variation, list) or not variation:
            raise OverrideConfigError(
                "Each template variation must be a non-empty list of charts",
                {"industry": industry, "variation": v_idx},
            )
        blueprints = []
        for c_idx, chart in enumerate(variation):
            try:
                blueprints.append(ChartBlueprint.from_dict(chart))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise OverrideConfigError(
                    f"Malformed chart entry: {e}",
                    {"industry": industry, "variation": v_idx, "chart": c_idx},
                ) from e
        pool.append(blueprints)
    return pool


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def load_override(path: str | Path) -> tuple[IndustryKey, IndustryOverride]:
    """Load one override bundle and the industry it applies to."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise OverrideConfigError(f"Cannot read override file: {e}",
                                  {"path": str(path)}) from e

    if not isinstance(data, dict):
        raise OverrideConfigError("Override file must contain a mapping",
                                  {"path": str(path)})

    key = industry_key_for(data.get("key") or path.stem)
    if key is None:
        raise OverrideConfigError(
            f"Override file does not name a known industry: {data.get('key') or path.stem}",
            {"path": str(path)},
        )
    data.setdefault("name", key.display_name)
    return key, IndustryOverride.from_dict(data)


def load_overrides(directory: str | Path) -> dict[IndustryKey, IndustryOverride]:
    """Load every ``*.yaml`` / ``*.yml`` / ``*.json`` bundle in *directory*.

    Files are read in name order; a later file for the same industry wins.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise OverrideConfigError("Override directory not found",
                                  {"path": str(directory)})
    overrides: dict[IndustryKey, IndustryOverride] = {}
    for path in sorted(directory.iterdir()):
        if path.suffix.lower() not in _SUFFIXES:
            continue
        key, override = load_override(path)
        if key in overrides:
            logger.info("Override %s replaces an earlier bundle for %s",
                        path.name, key.value)
        overrides[key] = override
    return overrides


def save_override(key: IndustryKey, override: IndustryOverride,
                  path: str | Path) -> None:
    """Serialize an override bundle to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {"key": key.value, **override.to_dict()}
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False,
                  allow_unicode=True, width=120)
