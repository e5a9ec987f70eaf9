"""
RiskPilot Canonicalization

Maps request values onto the keys used by the knowledge bases.

Every lookup key the engine derives from caller input is produced here,
so scoring and matching agree on one spelling:

    jurisdiction_score_key("South Korea")  -> "south_korea_operations"
    catalog_key("South Korea")             -> "SOUTH_KOREA"
    data_type_key("Special-Category Health") -> "special_category_health"
"""
from __future__ import annotations

import re


_DATA_SEPARATORS = re.compile(r"[ \-]")


def jurisdiction_score_key(jurisdiction: str) -> str:
    """Key into jurisdiction_risk scoring: lower case, spaces to '_', '_operations' suffix."""
    return jurisdiction.lower().replace(" ", "_") + "_operations"


def catalog_key(jurisdiction: str) -> str:
    """Region code in the regulatory catalog: upper case, spaces to '_'."""
    return jurisdiction.upper().replace(" ", "_")


def data_type_key(data_type: str) -> str:
    """Key into data_sensitivity categories: lower case, spaces and hyphens to '_'."""
    return _DATA_SEPARATORS.sub("_", data_type.lower())
