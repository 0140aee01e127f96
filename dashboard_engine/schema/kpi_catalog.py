"""Built-in KPI catalogue — five KPI cards per industry.

Each KPI names a case-insensitive column regex, an aggregation and its
display tokens.  Override bundles loaded at startup may replace an
industry's list (see :mod:`dashboard_engine.schema.loader`).

sales, marketing and realestate ship no KPI set; the KPI resolver falls
back to the generic card set for them.
"""

import re

from .industries import IndustryKey
from .models import Aggregation, IndustryConfig, KpiDefinition

_SUM = Aggregation.SUM
_AVG = Aggregation.AVG
_COUNT = Aggregation.COUNT


def _bg(start: str, end: str) -> str:
    return f"bg-gradient-to-br from-{start} to-{end}"


def _kpi(title: str, pattern: str, glyph: str, style: str,
         agg: Aggregation = _SUM, prefix: str | None = None,
         suffix: str | None = None) -> KpiDefinition:
    return KpiDefinition(
        title=title,
        key_match=re.compile(pattern, re.IGNORECASE),
        aggregation=agg,
        value_prefix=prefix,
        value_suffix=suffix,
        glyph=glyph,
        style=style,
    )


def _crm_kpis() -> list[KpiDefinition]:
    return [
        _kpi("Pipeline Value", r"est_value|total_value|deal|pipeline|value|amount",
             "DollarSign", _bg("blue-500", "indigo-700"), _SUM, prefix="₹"),
        _kpi("Total Leads", r"lead_id|lead_name|lead|contact|prospect",
             "Users", _bg("purple-500", "violet-600"), _COUNT),
        _kpi("Customers", r"customer|contact_type|first_name",
             "UserCheck", _bg("emerald-500", "green-600"), _COUNT),
        _kpi("Avg Deal Size", r"est_value|total_value|deal|amount|value",
             "Activity", _bg("cyan-500", "blue-600"), _AVG, prefix="₹"),
        _kpi("Activities", r"action|activity|task|call|meeting|log",
             "Calendar", _bg("orange-500", "amber-600"), _COUNT),
    ]


def build_industry_configs() -> dict[IndustryKey, IndustryConfig]:
    """Return a fresh copy of every built-in industry KPI configuration."""
    return {
        IndustryKey.FINANCE: IndustryConfig("Finance", [
            _kpi("Net Profit", r"profit|income|net", "DollarSign",
                 _bg("indigo-500", "blue-700"), _SUM, prefix="$"),
            _kpi("Burn Rate", r"expense|cost|burn|spend", "TrendingDown",
                 _bg("rose-500", "orange-600"), _SUM, prefix="$"),
            _kpi("Cash Reserve", r"balance|cash|reserve", "Activity",
                 _bg("emerald-500", "teal-600"), _SUM, prefix="$"),
            _kpi("ROI", r"roi|return", "TargetIcon",
                 _bg("cyan-500", "blue-600"), _AVG, suffix="%"),
            _kpi("Total Expenses", r"expense|cost|bill", "CreditCard",
                 _bg("red-400", "pink-600"), _SUM, prefix="$"),
        ]),
        IndustryKey.ECOMMERCE: IndustryConfig("E-Commerce", [
            _kpi("Total Revenue", r"sales|revenue|amount", "DollarSign",
                 _bg("pink-500", "rose-500"), _SUM, prefix="$"),
            _kpi("Conversion Rate", r"conversion|rate|cv", "ZapIcon",
                 _bg("purple-500", "indigo-600"), _AVG, suffix="%"),
            _kpi("Avg Order Value", r"aov|avg|order", "Activity",
                 _bg("teal-400", "emerald-600"), _AVG, prefix="$"),
            _kpi("Cart Abandonment", r"abandon|cart", "TrendingDown",
                 _bg("orange-500", "red-600"), _AVG, suffix="%"),
            _kpi("Total Orders", r"order|id|transaction", "ShoppingCart",
                 _bg("blue-400", "cyan-600"), _COUNT),
        ]),
        IndustryKey.SAAS: IndustryConfig("SaaS / Technology", [
            _kpi("MRR", r"mrr|revenue|monthly", "DollarSign",
                 _bg("violet-500", "purple-700"), _SUM, prefix="$"),
            _kpi("Churn Rate", r"churn|cancel", "TrendingDown",
                 _bg("red-500", "pink-600"), _AVG, suffix="%"),
            _kpi("Active Users", r"active|user|dau|mau", "Users",
                 _bg("cyan-400", "blue-600"), _COUNT),
            _kpi("ARR", r"arr|annual", "Activity",
                 _bg("indigo-500", "blue-600"), _SUM, prefix="$"),
            _kpi("LTV", r"ltv|lifetime", "TargetIcon",
                 _bg("emerald-500", "teal-600"), _AVG, prefix="$"),
        ]),
        IndustryKey.MANUFACTURING: IndustryConfig("Manufacturing", [
            _kpi("Yield Efficiency", r"yield|efficiency", "ZapIcon",
                 _bg("emerald-400", "green-600"), _AVG, suffix="%"),
            _kpi("Downtime Hours", r"down|stop|delay", "Clock",
                 _bg("rose-400", "red-600"), _SUM, suffix="h"),
            _kpi("Units Produced", r"unit|qty|count", "Package",
                 _bg("blue-400", "indigo-600"), _SUM),
            _kpi("Defect Rate", r"defect|fail|reject", "TrendingDown",
                 _bg("orange-500", "amber-600"), _AVG, suffix="%"),
            _kpi("OEE", r"oee|overall", "Activity",
                 _bg("purple-500", "indigo-500"), _AVG, suffix="%"),
        ]),
        IndustryKey.BANKING: IndustryConfig("Banking & BFSI", [
            _kpi("AUM", r"asset|aum|manage", "DollarSign",
                 _bg("blue-600", "indigo-800"), _SUM, prefix="$"),
            _kpi("Net Interest Margin", r"margin|interest|nim", "Activity",
                 _bg("emerald-500", "teal-700"), _AVG, suffix="%"),
            _kpi("New Accounts", r"account|new|user", "Users",
                 _bg("cyan-500", "blue-600"), _COUNT),
            _kpi("Loan Portfolio", r"loan|credit|lend", "CreditCard",
                 _bg("violet-500", "purple-700"), _SUM, prefix="$"),
            _kpi("NPA Ratio", r"npa|default|bad", "TrendingDown",
                 _bg("red-500", "rose-600"), _AVG, suffix="%"),
        ]),
        IndustryKey.INSURANCE: IndustryConfig("Insurance", [
            _kpi("Gross Premium", r"premium|gwp|sales", "DollarSign",
                 _bg("indigo-500", "blue-600"), _SUM, prefix="$"),
            _kpi("Claims Ratio", r"claim|ratio|loss", "Activity",
                 _bg("rose-500", "red-600"), _AVG, suffix="%"),
            _kpi("Active Policies", r"policy|active|count", "FileText",
                 _bg("emerald-500", "green-600"), _COUNT),
            _kpi("Renewal Rate", r"renew|retention", "ZapIcon",
                 _bg("cyan-500", "blue-500"), _AVG, suffix="%"),
            _kpi("Avg Claim Cost", r"cost|claim|payout", "CreditCard",
                 _bg("orange-400", "amber-600"), _AVG, prefix="$"),
        ]),
        IndustryKey.RETAIL: IndustryConfig("Retail", [
            _kpi("Total Sales", r"sales|revenue", "DollarSign",
                 _bg("pink-500", "red-500"), _SUM, prefix="$"),
            _kpi("Transactions", r"transaction|order", "ShoppingCart",
                 _bg("blue-400", "indigo-600"), _COUNT),
            _kpi("Basket Size", r"qty|basket|items", "Package",
                 _bg("teal-400", "emerald-600"), _AVG),
            _kpi("Footfall", r"visit|footfall", "Users",
                 _bg("purple-500", "violet-600"), _SUM),
            _kpi("Returns", r"return|refund", "TrendingDown",
                 _bg("orange-500", "amber-600"), _SUM, prefix="$"),
        ]),
        IndustryKey.MARKETPLACE: IndustryConfig("Marketplace", [
            _kpi("GMV", r"gmv|sales|volume", "DollarSign",
                 _bg("violet-500", "indigo-700"), _SUM, prefix="$"),
            _kpi("Take Rate", r"commission|take|rate", "ZapIcon",
                 _bg("emerald-500", "green-600"), _AVG, suffix="%"),
            _kpi("Active Sellers", r"seller|vendor", "Store",
                 _bg("blue-500", "cyan-600"), _COUNT),
            _kpi("Active Buyers", r"buyer|user|customer", "Users",
                 _bg("pink-500", "rose-600"), _COUNT),
            _kpi("Avg Order Val", r"aov|order|value", "Activity",
                 _bg("amber-400", "orange-600"), _AVG, prefix="$"),
        ]),
        IndustryKey.HEALTHCARE: IndustryConfig("Healthcare", [
            _kpi("Patient Count", r"patient|user", "Users",
                 _bg("blue-400", "indigo-600"), _COUNT),
            _kpi("Avg Wait Time", r"wait|time", "Clock",
                 _bg("teal-400", "emerald-600"), _AVG, suffix="m"),
            _kpi("Bed Occupancy", r"occupancy|bed", "Store",
                 _bg("cyan-500", "blue-600"), _AVG, suffix="%"),
            _kpi("Readmission Rate", r"return|readmission", "TrendingDown",
                 _bg("rose-500", "red-600"), _AVG, suffix="%"),
            _kpi("Treatment Cost", r"cost|bill", "DollarSign",
                 _bg("orange-400", "amber-600"), _AVG, prefix="$"),
        ]),
        IndustryKey.PHARMA: IndustryConfig("Pharma", [
            _kpi("R&D Spend", r"research|r&d|spend", "DollarSign",
                 _bg("blue-500", "indigo-700"), _SUM, prefix="$"),
            _kpi("Approval Rate", r"approval|success", "TargetIcon",
                 _bg("emerald-500", "green-600"), _AVG, suffix="%"),
            _kpi("Clinical Trials", r"trial|test", "Activity",
                 _bg("purple-500", "violet-600"), _COUNT),
            _kpi("Patent Expiry", r"patent|expire", "Clock",
                 _bg("orange-500", "red-600"), _COUNT),
            _kpi("Drug Sales", r"sales|revenue", "Package",
                 _bg("cyan-500", "teal-600"), _SUM, prefix="$"),
        ]),
        IndustryKey.LOGISTICS: IndustryConfig("Logistics", [
            _kpi("On-Time Delivery", r"time|ontime|delivery", "Clock",
                 _bg("emerald-500", "green-600"), _AVG, suffix="%"),
            _kpi("Fleet Utilization", r"fleet|utilization", "Activity",
                 _bg("blue-500", "indigo-600"), _AVG, suffix="%"),
            _kpi("Total Shipments", r"shipment|order", "Package",
                 _bg("purple-500", "violet-600"), _COUNT),
            _kpi("Fuel Costs", r"fuel|cost", "DollarSign",
                 _bg("red-500", "orange-600"), _SUM, prefix="$"),
            _kpi("Avg Load", r"weight|capacity", "LayersIcon",
                 _bg("cyan-500", "teal-600"), _AVG),
        ]),
        IndustryKey.TELECOM: IndustryConfig("Telecom", [
            _kpi("ARPU", r"arpu|revenue|user", "DollarSign",
                 _bg("blue-600", "indigo-800"), _AVG, prefix="$"),
            _kpi("Churn Rate", r"churn|left", "TrendingDown",
                 _bg("red-500", "rose-600"), _AVG, suffix="%"),
            _kpi("Data Usage", r"data|usage|gb", "Activity",
                 _bg("cyan-500", "teal-600"), _SUM, suffix="TB"),
            _kpi("Subscribers", r"subscriber|user", "Users",
                 _bg("purple-500", "violet-600"), _COUNT),
            _kpi("Network Uptime", r"uptime|network", "ZapIcon",
                 _bg("emerald-500", "green-600"), _AVG, suffix="%"),
        ]),
        IndustryKey.ENERGY: IndustryConfig("Energy", [
            _kpi("Power Gen", r"power|generation|kwh", "ZapIcon",
                 _bg("orange-400", "amber-600"), _SUM, suffix="MWh"),
            _kpi("Carbon Footprint", r"carbon|co2|emission", "TrendingDown",
                 _bg("gray-500", "slate-700"), _SUM, suffix="t"),
            _kpi("Grid Load", r"load|grid", "Activity",
                 _bg("blue-500", "cyan-600"), _AVG, suffix="%"),
            _kpi("Efficiency", r"efficiency|factor", "TargetIcon",
                 _bg("emerald-500", "green-600"), _AVG, suffix="%"),
            _kpi("Revenue", r"revenue|sales", "DollarSign",
                 _bg("indigo-500", "purple-600"), _SUM, prefix="$"),
        ]),
        IndustryKey.HR: IndustryConfig("HR", [
            _kpi("Headcount", r"headcount|employee", "Users",
                 _bg("blue-500", "indigo-600"), _COUNT),
            _kpi("Attrition Rate", r"attrition|churn|turnover", "TrendingDown",
                 _bg("red-500", "rose-600"), _AVG, suffix="%"),
            _kpi("Time to Hire", r"time|hire|days", "Clock",
                 _bg("orange-400", "amber-600"), _AVG, suffix="d"),
            _kpi("eNPS", r"enps|score", "Activity",
                 _bg("purple-500", "violet-600"), _AVG),
            _kpi("Training Hours", r"training|hours", "LayersIcon",
                 _bg("emerald-500", "teal-600"), _SUM),
        ]),
        IndustryKey.EDUCATION: IndustryConfig("Education & EdTech", [
            _kpi("Enrollments", r"enroll|student", "Users",
                 _bg("blue-500", "indigo-700"), _COUNT),
            _kpi("Completion Rate", r"complete|rate", "TargetIcon",
                 _bg("emerald-500", "green-600"), _AVG, suffix="%"),
            _kpi("Avg Score", r"score|grade", "Activity",
                 _bg("purple-500", "pink-600"), _AVG),
            _kpi("Course Content", r"hours|content", "LayersIcon",
                 _bg("orange-400", "amber-500"), _SUM, suffix="h"),
            _kpi("Revenue", r"fee|revenue", "DollarSign",
                 _bg("cyan-500", "blue-600"), _SUM, prefix="$"),
        ]),
        IndustryKey.HOSPITALITY: IndustryConfig("Hospitality", [
            _kpi("RevPAR", r"revpar|revenue", "DollarSign",
                 _bg("amber-500", "amber-600"), _AVG, prefix="$"),
            _kpi("Occupancy Rate", r"occupancy|rate", "Store",
                 _bg("blue-500", "indigo-600"), _AVG, suffix="%"),
            _kpi("ADR", r"adr|daily", "Activity",
                 _bg("emerald-500", "teal-600"), _AVG, prefix="$"),
            _kpi("Guest Score", r"score|rating|review", "TargetIcon",
                 _bg("purple-500", "pink-600"), _AVG),
            _kpi("Bookings", r"booking|reservation", "Calendar",
                 _bg("cyan-500", "blue-500"), _COUNT),
        ]),
        IndustryKey.AGRICULTURE: IndustryConfig("AgriTech", [
            _kpi("Crop Yield", r"yield|output|crop", "Package",
                 _bg("green-500", "emerald-700"), _SUM, suffix="t"),
            _kpi("Soil Health", r"soil|health", "Activity",
                 _bg("amber-500", "orange-600"), _AVG),
            _kpi("Water Usage", r"water|usage", "ZapIcon",
                 _bg("blue-400", "cyan-600"), _SUM, suffix="L"),
            _kpi("Market Price", r"price|market", "DollarSign",
                 _bg("purple-500", "violet-600"), _AVG, prefix="$"),
            _kpi("Area Cultivated", r"area|land", "Map",
                 _bg("lime-500", "green-600"), _SUM, suffix="ha"),
        ]),
        IndustryKey.GOVERNMENT: IndustryConfig("Government", [
            _kpi("Budget Util", r"budget|spend", "DollarSign",
                 _bg("blue-600", "indigo-800"), _AVG, suffix="%"),
            _kpi("Citizen Satisfaction", r"satisfaction|score", "Users",
                 _bg("emerald-500", "teal-600"), _AVG, suffix="%"),
            _kpi("Service Requests", r"request|service", "FileText",
                 _bg("orange-500", "red-600"), _COUNT),
            _kpi("Avg Latency", r"latency|time|delay", "Clock",
                 _bg("purple-500", "violet-600"), _AVG, suffix="d"),
            _kpi("Projects Completed", r"project|done", "TargetIcon",
                 _bg("cyan-500", "blue-600"), _COUNT),
        ]),
        IndustryKey.ODOO: IndustryConfig("Odoo CRM", [
            _kpi("Total Revenue", r"revenue|expected", "DollarSign",
                 _bg("purple-600", "indigo-800"), _SUM, prefix="$"),
            _kpi("Win Rate", r"probability|win", "TargetIcon",
                 _bg("emerald-500", "teal-600"), _AVG, suffix="%"),
            _kpi("Open Leads", r"id|name", "LayersIcon",
                 _bg("orange-500", "red-600"), _COUNT),
            _kpi("Avg Deal Size", r"revenue|expected", "Activity",
                 _bg("blue-500", "cyan-600"), _AVG, prefix="$"),
            # distinct creation dates stand in for lead velocity
            _kpi("Lead Velocity", r"date|create", "ZapIcon",
                 _bg("pink-500", "rose-600"), _COUNT, suffix=" /mo"),
        ]),
        IndustryKey.CRM: IndustryConfig("CRM / Sales", _crm_kpis()),
    }
