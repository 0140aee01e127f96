"""QA validator — checks template pools and resolved charts for contract breaks.

Pool checks run against the registry (built-ins plus overrides) and catch
malformed override bundles before they reach a dashboard: pool size,
variation size, hero placement and empty blueprint fields.  Chart checks
verify that every resolved axis names a real column of the dataset it
was resolved against.

Usage::

    from dashboard_engine.qa.validator import QAValidator

    validator = QAValidator(registry)
    result = validator.validate_registry()
    assert result.passed, result.report()
"""

from dataclasses import dataclass, field

from dashboard_engine.generator.seeded import POOL_SIZE
from dashboard_engine.processor.columns import COUNT_SENTINEL
from dashboard_engine.processor.dataset import DatasetView
from dashboard_engine.schema.industries import IndustryKey, normalize_industry
from dashboard_engine.schema.models import ChartSize, ResolvedChartSpec, TemplatePool

VARIATION_SIZE = 4


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class Issue:
    """A single QA issue found during validation."""
    severity: str       # "error" or "warning"
    industry: str       # "" for dataset-level checks
    variation: int      # 1-based, -1 for pool-level issues
    chart: int          # 0-based position, -1 for variation-level issues
    category: str       # e.g. "pool_size", "hero", "missing_column"
    message: str

    def __str__(self) -> str:
        parts = []
        if self.industry:
            parts.append(self.industry)
        if self.variation >= 0:
            parts.append(f"template{self.variation}")
        if self.chart >= 0:
            parts.append(f"chart {self.chart}")
        loc = " / ".join(parts) or "dataset"
        return f"[{self.severity.upper()}] {loc}: {self.message}"


@dataclass
class QAResult:
    """Aggregated result of QA validation."""
    issues: list[Issue] = field(default_factory=list)

    @property
    def errors(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    def merge(self, other: "QAResult") -> "QAResult":
        self.issues.extend(other.issues)
        return self

    def summary(self) -> str:
        """One-line summary string."""
        status = "PASS" if self.passed else "FAIL"
        return (
            f"QA {status}: {len(self.errors)} error(s), "
            f"{len(self.warnings)} warning(s)"
        )

    def report(self) -> str:
        """Multi-line report of all issues."""
        lines = [self.summary()]
        for issue in self.issues:
            lines.append(f"  {issue}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# QAValidator
# ---------------------------------------------------------------------------

class QAValidator:
    """Validates template pools of a registry and charts resolved from them."""

    def __init__(self, registry) -> None:
        self.registry = registry

    def validate_registry(self) -> QAResult:
        """Check the pool of every known industry."""
        result = QAResult()
        for key in IndustryKey:
            result.merge(self.validate_pool(key))
        return result

    def validate_pool(self, industry) -> QAResult:
        key = normalize_industry(industry)
        return check_pool(key.value, self.registry.get_template_pool(key))

    def validate_charts(self, charts: list[ResolvedChartSpec], dataset) -> QAResult:
        return check_charts(charts, dataset)


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def check_pool(industry: str, pool: TemplatePool) -> QAResult:
    result = QAResult()

    def add(severity, variation, chart, category, message):
        result.issues.append(Issue(severity, industry, variation, chart, category, message))

    if not pool:
        add("error", -1, -1, "pool_size", "Template pool is empty")
        return result
    if len(pool) != POOL_SIZE:
        add("warning", -1, -1, "pool_size",
            f"Pool has {len(pool)} variation(s), expected {POOL_SIZE}")

    for v_idx, variation in enumerate(pool, start=1):
        if len(variation) != VARIATION_SIZE:
            add("warning", v_idx, -1, "variation_size",
                f"Variation has {len(variation)} chart(s), expected {VARIATION_SIZE}")
        if not variation:
            add("error", v_idx, -1, "variation_size", "Variation has no charts")
            continue
        if variation[0].size is not ChartSize.LARGE:
            add("error", v_idx, 0, "hero", "First chart is not the large hero chart")
        heroes = sum(1 for bp in variation if bp.size is ChartSize.LARGE)
        if heroes > 1:
            add("warning", v_idx, -1, "hero", f"{heroes} large charts in one variation")

        for c_idx, bp in enumerate(variation):
            if not bp.type:
                add("error", v_idx, c_idx, "chart_type", "Chart has no type")
            if not bp.title:
                add("warning", v_idx, c_idx, "title", "Chart has no title")
            if not bp.x_role:
                add("error", v_idx, c_idx, "role", "Chart has no x role")
            if not bp.y_role:
                add("error", v_idx, c_idx, "role", "Chart has no y role")
            if not bp.palette:
                add("warning", v_idx, c_idx, "palette", "Chart has no colour palette")
    return result


def check_charts(charts: list[ResolvedChartSpec], dataset) -> QAResult:
    """Every resolved axis must name a column of *dataset*."""
    view = dataset if isinstance(dataset, DatasetView) else DatasetView(dataset)
    columns = set(view.columns)
    result = QAResult()

    def add(severity, chart, category, message):
        result.issues.append(Issue(severity, "", -1, chart, category, message))

    for c_idx, chart in enumerate(charts):
        if not chart.resolved:
            add("warning", c_idx, "unresolved", f"'{chart.title}' has no data yet")
            continue
        if chart.x_role not in columns:
            add("error", c_idx, "missing_column",
                f"x axis {chart.x_role!r} is not a dataset column")
        ys = chart.y_role if isinstance(chart.y_role, list) else [chart.y_role]
        if not ys:
            add("error", c_idx, "missing_column", "y axis resolved to no series")
        for y in ys:
            if y != COUNT_SENTINEL and y not in columns:
                add("error", c_idx, "missing_column",
                    f"y axis {y!r} is not a dataset column")
    return result
