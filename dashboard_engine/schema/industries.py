"""Industry keys and identifier normalization.

Free-text industry identifiers ("SFW CRM", "Manufacturing Plant 3") are
mapped onto the closed :class:`IndustryKey` vocabulary.  Every registry,
palette and resolution-chain decision dispatches on the enum rather than
on raw strings.
"""

import logging
import re
from enum import Enum

logger = logging.getLogger(__name__)


class IndustryKey(Enum):
    FINANCE = "finance"
    ECOMMERCE = "ecommerce"
    SAAS = "saas"
    MANUFACTURING = "manufacturing"
    BANKING = "banking"
    INSURANCE = "insurance"
    RETAIL = "retail"
    MARKETPLACE = "marketplace"
    HEALTHCARE = "healthcare"
    PHARMA = "pharma"
    LOGISTICS = "logistics"
    TELECOM = "telecom"
    ENERGY = "energy"
    HR = "hr"
    EDUCATION = "education"
    HOSPITALITY = "hospitality"
    AGRICULTURE = "agriculture"
    GOVERNMENT = "government"
    ODOO = "odoo"
    CRM = "crm"
    SALES = "sales"
    MARKETING = "marketing"
    REALESTATE = "realestate"

    @property
    def display_name(self) -> str:
        """Name fed to the seeded generator, e.g. ``"Finance"``."""
        return self.value[:1].upper() + self.value[1:]


DEFAULT_INDUSTRY = IndustryKey.RETAIL

# Exact identifiers that are not enum values themselves
_ALIASES = {
    "sfw crm": IndustryKey.CRM,
    "real estate": IndustryKey.REALESTATE,
    "e-commerce": IndustryKey.ECOMMERCE,
}

# Ordered substring rules; first match wins
_SUBSTRING_RULES: list[tuple[re.Pattern, IndustryKey]] = [
    (re.compile(r"odoo"), IndustryKey.ODOO),
    (re.compile(r"crm|sfw"), IndustryKey.CRM),
    (re.compile(r"retail"), IndustryKey.RETAIL),
    (re.compile(r"sale"), IndustryKey.SALES),
    (re.compile(r"marketplace"), IndustryKey.MARKETPLACE),
    (re.compile(r"market"), IndustryKey.MARKETING),
    (re.compile(r"manufact"), IndustryKey.MANUFACTURING),
    (re.compile(r"financ"), IndustryKey.FINANCE),
    (re.compile(r"health"), IndustryKey.HEALTHCARE),
    (re.compile(r"edu"), IndustryKey.EDUCATION),
    (re.compile(r"logistic"), IndustryKey.LOGISTICS),
    (re.compile(r"real"), IndustryKey.REALESTATE),
    (re.compile(r"\bhr\b|people|human"), IndustryKey.HR),
    (re.compile(r"saas|tech|\bit\b"), IndustryKey.SAAS),
    (re.compile(r"commerce"), IndustryKey.ECOMMERCE),
    (re.compile(r"bank|bfsi"), IndustryKey.BANKING),
    (re.compile(r"insur"), IndustryKey.INSURANCE),
    (re.compile(r"pharma"), IndustryKey.PHARMA),
    (re.compile(r"telecom"), IndustryKey.TELECOM),
    (re.compile(r"energy|utilit"), IndustryKey.ENERGY),
    (re.compile(r"hospitality|hotel"), IndustryKey.HOSPITALITY),
    (re.compile(r"agri"), IndustryKey.AGRICULTURE),
    (re.compile(r"govern|public"), IndustryKey.GOVERNMENT),
]

_BY_VALUE = {k.value: k for k in IndustryKey}


def industry_key_for(identifier: "str | IndustryKey | None") -> IndustryKey | None:
    """Match *identifier* to a known key, or ``None`` when nothing matches."""
    if isinstance(identifier, IndustryKey):
        return identifier
    if not identifier:
        return None
    text = " ".join(str(identifier).lower().replace("_", " ").split())
    if text in _BY_VALUE:
        return _BY_VALUE[text]
    if text in _ALIASES:
        return _ALIASES[text]
    for pattern, key in _SUBSTRING_RULES:
        if pattern.search(text):
            return key
    return None


def normalize_industry(identifier: "str | IndustryKey | None") -> IndustryKey:
    """Map a free-text industry identifier to a key, defaulting to retail."""
    key = industry_key_for(identifier)
    if key is None:
        logger.debug("Unknown industry %r, using %s", identifier,
                     DEFAULT_INDUSTRY.value)
        return DEFAULT_INDUSTRY
    return key


def is_relationship_industry(key: IndustryKey) -> bool:
    """True for CRM-shaped industries that use the CRM resolution chain."""
    return key in (IndustryKey.CRM, IndustryKey.ODOO)
