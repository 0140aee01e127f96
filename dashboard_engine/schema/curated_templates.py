"""Hand-authored template pools for finance, CRM and Odoo.

Finance and CRM ship the full ten variations.  Odoo ships a single
pipeline variation; the template store fills the remaining nine from the
seeded generator.

Blueprint convention: the first chart of each variation is the large,
high-priority hero; the other three are normal-size, medium priority.
CRM roles are the literal SFW CRM field names (``lead_status``,
``est_value``, ...) resolved by the CRM chain.
"""

from .design_system import PALETTES
from .models import ChartBlueprint, ChartSize, Priority, TemplatePool


def _hero(type_: str, title: str, x: str, y: "str | list[str]",
          x_label: str, y_label: str, palette: list[str]) -> ChartBlueprint:
    return ChartBlueprint(type_, title, x, y, x_label, y_label,
                          Priority.HIGH, ChartSize.LARGE, list(palette))


def _chart(type_: str, title: str, x: str, y: "str | list[str]",
           x_label: str, y_label: str, palette: list[str]) -> ChartBlueprint:
    return ChartBlueprint(type_, title, x, y, x_label, y_label,
                          Priority.MEDIUM, ChartSize.NORMAL, list(palette))


P = PALETTES


# ---------------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------------

def build_finance_templates() -> TemplatePool:
    return [
        # Executive financial overview
        [
            _hero("gradient-area", "Revenue & Growth Trajectory", "time", "sales", "Period", "Revenue", P[4]),
            _chart("bar", "Profit by Region", "region", "profit", "Region", "Profit", P[0]),
            _chart("pie", "Revenue Share by Category", "category", "sales", "Category", "Revenue", P[1]),
            _chart("line", "Expense Trend", "time", "cost", "Period", "Expenses", P[2]),
        ],
        # Profitability analysis
        [
            _hero("mixed-line-bar", "Revenue vs Profit Margins", "time", ["sales", "profit"], "Period", "Amount", P[2]),
            _chart("bar", "Top Profitable Products", "product", "profit", "Product", "Profit", P[3]),
            _chart("scatter", "Cost vs Revenue Correlation", "cost", "sales", "Cost", "Revenue", P[4]),
            _chart("gauge", "Gross Margin %", "none", "rate", "", "Margin", P[0]),
        ],
        # Cash flow and liquidity
        [
            _hero("line", "Net Cash Flow Evolution", "time", "profit", "Period", "Cash Flow", P[5]),
            _chart("waterfall", "Profit Bridge", "category", "profit", "Item", "Value", P[1]),
            _chart("bar", "Receivables by Region", "region", "sales", "Region", "Receivables", P[4]),
            _chart("line", "Operating Expenses", "time", "cost", "Period", "Opex", P[2]),
        ],
        # Expense management
        [
            _hero("bar", "Departmental Expense Breakdown", "department", "cost", "Department", "Expenses", P[5]),
            _chart("pie", "Cost Structure", "category", "cost", "Category", "Cost", P[3]),
            _chart("treemap", "Vendor Spend Map", "vendor", "cost", "Vendor", "Spend", P[0]),
            _chart("line", "Cost Reduction Trend", "time", "cost", "Period", "Cost", P[1]),
        ],
        # Revenue intelligence
        [
            _hero("gradient-area", "Cumulative Revenue Growth", "time", "sales", "Time", "Revenue", P[0]),
            _chart("funnel", "Sales Conversion Pipeline", "status", "count", "Stage", "Volume", P[4]),
            _chart("bar", "Revenue by Channel", "channel", "sales", "Channel", "Revenue", P[3]),
            _chart("pie", "Customer Segment Contribution", "segment", "sales", "Segment", "Revenue", P[2]),
        ],
        # Operational efficiency
        [
            _hero("bar", "Revenue per Employee/Unit", "time", "efficiency", "Period", "Efficiency", P[1]),
            _chart("gauge", "Budget Utilization %", "none", "rate", "", "Utilization", P[5]),
            _chart("line", "Overhead Costs", "time", "cost", "Period", "Overhead", P[4]),
            _chart("scatter", "Spend vs Output", "cost", "volume", "Spend", "Output", P[2]),
        ],
        # Strategic growth (CFO view)
        [
            _hero("mixed-line-bar", "Actual vs Budget", "time", ["sales", "value"], "Period", "Value", P[6]),
            _chart("bar", "Regional Growth Leaders", "region", "growth", "Region", "Growth %", P[0]),
            _chart("pie", "Investment Portfolio", "category", "value", "Asset", "Value", P[3]),
            _chart("line", "EBITDA Trend", "time", "profit", "Period", "EBITDA", P[1]),
        ],
        # Product performance
        [
            _hero("bar", "Product Line Profitability", "product", "profit", "Product", "Profit", P[7]),
            _chart("bubble", "Volume vs Margin Matrix", "volume", "rate", "Volume", "Margin", P[5]),
            _chart("line", "Unit Sales Velocity", "time", "volume", "Period", "Units", P[2]),
            _chart("bar", "Returns/Refunds Impact", "category", "cost", "Category", "Returns Cost", P[4]),
        ],
        # Forecasting and risk
        [
            _hero("line", "Revenue Forecast Model", "time", "sales", "Period", "Projected Revenue", P[3]),
            _chart("radar", "Risk Profile", "category", "score", "Risk Type", "Level", P[0]),
            _chart("bar", "Variance Analysis", "category", "value", "Item", "Variance", P[1]),
            _chart("pie", "Liability Distribution", "source", "value", "Source", "Value", P[6]),
        ],
        # Shareholder value
        [
            _hero("gradient-area", "Detailed Net Income", "time", "profit", "Period", "Net Income", P[2]),
            _chart("bar", "Dividend Payouts", "time", "value", "Year", "Payout", P[5]),
            _chart("line", "EPS Trend", "time", "score", "Period", "EPS", P[4]),
            _chart("bar", "Equity Structure", "category", "value", "Holder", "Equity", P[3]),
        ],
    ]


# ---------------------------------------------------------------------------
# CRM (SFW CRM tables: leads, customers, companies, activity logs, quotations)
# ---------------------------------------------------------------------------

_STATUS_COLORS = ["#22C55E", "#3B82F6", "#F59E0B", "#EF4444", "#8B5CF6", "#EC4899"]


def build_crm_templates() -> TemplatePool:
    return [
        # Sales pipeline overview
        [
            _hero("funnel", "Lead Pipeline by Status", "lead_status", "est_value", "Pipeline Stage", "Deal Value",
                  ["#3B82F6", "#6366F1", "#8B5CF6", "#A855F7", "#D946EF", "#EC4899", "#F43F5E", "#10B981"]),
            _chart("pie", "Leads by Source", "lead_source", "est_value", "Lead Source", "Value",
                   ["#10B981", "#3B82F6", "#F59E0B", "#EF4444", "#8B5CF6"]),
            _chart("bar", "Deal Value by Industry", "industry", "est_value", "Industry", "Est. Value",
                   ["#6366F1", "#8B5CF6", "#A855F7", "#D946EF", "#EC4899"]),
            _chart("doughnut", "Lead Status Distribution", "lead_status", "count", "Status", "Count",
                   _STATUS_COLORS),
        ],
        # Customer analytics
        [
            _hero("bar", "Customers by Contact Type", "contact_type", "count", "Contact Type", "Count",
                  ["#3B82F6", "#10B981", "#F59E0B", "#EF4444"]),
            _chart("pie", "Customer Sources", "source", "count", "Source", "Count",
                   ["#6366F1", "#EC4899", "#10B981", "#F59E0B"]),
            _chart("doughnut", "Customer Status", "status", "count", "Status", "Count",
                   ["#22C55E", "#EF4444"]),
            _chart("bar", "Customers by Country", "country", "count", "Country", "Customers",
                   ["#8B5CF6", "#A855F7", "#D946EF", "#EC4899"]),
        ],
        # Company performance
        [
            _hero("bar", "Company Value by Industry", "industry", "total_value", "Industry", "Total Value",
                  ["#10B981", "#3B82F6", "#F59E0B", "#8B5CF6"]),
            _chart("pie", "Companies by Size", "size", "count", "Company Size", "Count",
                   ["#3B82F6", "#6366F1", "#8B5CF6", "#A855F7"]),
            _chart("bar", "Contact Count by Company", "name", "contact_count", "Company", "Contacts",
                   ["#EC4899", "#F43F5E", "#F59E0B", "#10B981"]),
            _chart("doughnut", "Revenue Distribution", "revenue", "count", "Revenue Range", "Companies",
                   ["#22C55E", "#3B82F6", "#F59E0B", "#EF4444"]),
        ],
        # Lead activity analysis
        [
            _hero("bar", "Activity by Action Type", "action", "count", "Action", "Count",
                  ["#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6"]),
            _chart("line", "Activity Timeline", "created_at", "count", "Date", "Activities", ["#6366F1"]),
            _chart("pie", "Actions by Performer", "performed_by", "count", "User", "Actions",
                   ["#EC4899", "#8B5CF6", "#3B82F6", "#10B981"]),
            _chart("bar", "Stage Changes Over Time", "details", "count", "Stage Change", "Count",
                   ["#F59E0B", "#EF4444", "#22C55E", "#3B82F6"]),
        ],
        # Pipeline value analysis
        [
            _hero("gradient-area", "Pipeline Value Trend", "created_at", "est_value", "Date", "Est. Value",
                  ["#3B82F6", "#6366F1"]),
            _chart("bar", "Value by Lead Owner", "lead_owner", "est_value", "Sales Owner", "Pipeline Value",
                   ["#10B981", "#3B82F6", "#F59E0B"]),
            _chart("pie", "Value by Lead Source", "lead_source", "est_value", "Source", "Value",
                   ["#8B5CF6", "#EC4899", "#3B82F6", "#10B981"]),
            _chart("bar", "Avg Deal Size by Industry", "industry", "est_value", "Industry", "Avg Value",
                   ["#F59E0B", "#EF4444", "#22C55E", "#3B82F6"]),
        ],
        # Sales conversion funnel
        [
            _hero("funnel", "Sales Conversion Funnel", "lead_status", "count", "Stage", "Leads",
                  ["#3B82F6", "#6366F1", "#8B5CF6", "#A855F7", "#D946EF", "#EC4899", "#22C55E", "#EF4444"]),
            _chart("gauge", "Win Rate", "none", "rate", "", "Win %", ["#22C55E"]),
            _chart("bar", "Lost Reasons Analysis", "lead_status", "count", "Status", "Count",
                   ["#EF4444", "#F59E0B", "#3B82F6"]),
            _chart("pie", "Pipeline Stage Distribution", "lead_stage", "est_value", "Stage", "Value",
                   ["#10B981", "#3B82F6", "#8B5CF6", "#F59E0B"]),
        ],
        # Geographic analysis
        [
            _hero("bar", "Customers by Region", "state", "count", "State/Region", "Customers",
                  ["#3B82F6", "#6366F1", "#8B5CF6", "#A855F7"]),
            _chart("pie", "Distribution by Country", "country", "count", "Country", "Count",
                   ["#10B981", "#3B82F6", "#F59E0B", "#EF4444"]),
            _chart("bar", "Leads by City", "city", "count", "City", "Leads",
                   ["#EC4899", "#8B5CF6", "#3B82F6"]),
            _chart("doughnut", "Market Presence", "country", "est_value", "Market", "Value",
                   ["#22C55E", "#3B82F6", "#F59E0B"]),
        ],
        # Team performance
        [
            _hero("bar", "Pipeline by Sales Owner", "lead_owner", "est_value", "Sales Rep", "Pipeline Value",
                  ["#3B82F6", "#10B981", "#F59E0B", "#8B5CF6"]),
            _chart("pie", "Lead Distribution by Owner", "lead_owner", "count", "Owner", "Leads",
                   ["#6366F1", "#EC4899", "#10B981", "#F59E0B"]),
            _chart("bar", "Activities by User", "performed_by", "count", "User", "Activities",
                   ["#8B5CF6", "#A855F7", "#D946EF"]),
            _chart("line", "Team Activity Trend", "created_at", "count", "Date", "Actions", ["#3B82F6"]),
        ],
        # Product and quotation analysis
        [
            _hero("bar", "Products by Category", "category_name", "count", "Category", "Products",
                  ["#10B981", "#3B82F6", "#F59E0B"]),
            _chart("pie", "Quotation Status", "status", "total_amount", "Status", "Amount",
                   ["#22C55E", "#3B82F6", "#F59E0B", "#EF4444"]),
            _chart("bar", "Product Pricing", "name", "base_price", "Product", "Price",
                   ["#8B5CF6", "#EC4899", "#3B82F6"]),
            _chart("line", "Quotation Trend", "created_at", "total_amount", "Date", "Value", ["#6366F1"]),
        ],
        # Executive CRM dashboard
        [
            _hero("mixed-line-bar", "Pipeline vs Closed Deals", "lead_status", ["est_value", "count"],
                  "Status", "Value/Count", ["#3B82F6", "#10B981"]),
            _chart("gauge", "Pipeline Health Score", "none", "score", "", "Score",
                   ["#22C55E", "#F59E0B", "#EF4444"]),
            _chart("radar", "Sales Performance Metrics", "lead_source", "est_value", "Source", "Value",
                   ["#8B5CF6", "#3B82F6"]),
            _chart("pie", "Revenue by Industry", "industry", "est_value", "Industry", "Value",
                   ["#10B981", "#3B82F6", "#F59E0B", "#8B5CF6", "#EC4899"]),
        ],
    ]


# ---------------------------------------------------------------------------
# Odoo
# ---------------------------------------------------------------------------

def build_odoo_templates() -> TemplatePool:
    return [
        [
            _hero("funnel", "Sales Pipeline", "stage", "revenue", "Stage", "Expected Revenue", P[4]),
            _chart("bar", "Revenue by Owner", "owner", "revenue", "Salesperson", "Revenue", P[1]),
            _chart("pie", "Leads by Stage", "stage", "revenue", "Stage", "Count", P[0]),
            _chart("line", "Revenue Forecast", "create_date", "revenue", "Date", "Revenue", P[2]),
        ],
    ]
