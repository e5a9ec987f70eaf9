"""
Tests for RiskPilot canonicalization

Every enumerated request value must map to a key the knowledge base
actually carries; a silent mismatch would degrade scoring to defaults.
"""
import pytest

from riskpilot.engine.normalization import (
    catalog_key,
    data_type_key,
    jurisdiction_score_key,
)
from riskpilot.models import DataType, Jurisdiction, ScoringFactor


class TestJurisdictionScoreKey:
    """Tests for jurisdiction_score_key."""

    @pytest.mark.parametrize("jurisdiction,expected", [
        ("EU", "eu_operations"),
        ("USA", "usa_operations"),
        ("California", "california_operations"),
        ("UK", "uk_operations"),
        ("China", "china_operations"),
        ("Canada", "canada_operations"),
        ("Singapore", "singapore_operations"),
        ("Australia", "australia_operations"),
        ("Japan", "japan_operations"),
        ("South_Korea", "south_korea_operations"),
        ("Brazil", "brazil_operations"),
        ("India", "india_operations"),
    ])
    def test_enumerated_values(self, jurisdiction, expected):
        """Test every form value produces its scoring key."""
        assert jurisdiction_score_key(jurisdiction) == expected

    def test_spaces_become_underscores(self):
        """Test display names with spaces canonicalize like codes."""
        assert jurisdiction_score_key("South Korea") == "south_korea_operations"

    def test_every_space_replaced(self):
        """Test all spaces are replaced, not only the first."""
        assert jurisdiction_score_key("New South Wales") == "new_south_wales_operations"

    def test_every_jurisdiction_is_scored(self, framework):
        """Test every enumerated jurisdiction has a scoring category."""
        table = framework.table(ScoringFactor.JURISDICTION_RISK)
        for jurisdiction in Jurisdiction:
            assert table.score_for(jurisdiction_score_key(jurisdiction.value)) is not None


class TestCatalogKey:
    """Tests for catalog_key."""

    @pytest.mark.parametrize("jurisdiction,expected", [
        ("EU", "EU"),
        ("eu", "EU"),
        ("California", "CALIFORNIA"),
        ("South_Korea", "SOUTH_KOREA"),
        ("South Korea", "SOUTH_KOREA"),
    ])
    def test_canonical_codes(self, jurisdiction, expected):
        """Test upper-casing and space substitution."""
        assert catalog_key(jurisdiction) == expected

    def test_every_jurisdiction_is_in_catalog(self, catalog):
        """Test every enumerated jurisdiction has a catalog region."""
        for jurisdiction in Jurisdiction:
            assert catalog.get_region(catalog_key(jurisdiction.value)) is not None


class TestDataTypeKey:
    """Tests for data_type_key."""

    def test_enumerated_values_unchanged(self):
        """Test form values are already canonical."""
        for data_type in DataType:
            assert data_type_key(data_type.value) == data_type.value

    @pytest.mark.parametrize("value,expected", [
        ("Financial Data", "financial_data"),
        ("special-category-health", "special_category_health"),
        ("Special-Category Biometric", "special_category_biometric"),
    ])
    def test_separators_and_case(self, value, expected):
        """Test spaces and hyphens become underscores, case is folded."""
        assert data_type_key(value) == expected

    def test_every_data_type_is_scored(self, framework):
        """Test every enumerated data type has a scoring category."""
        table = framework.table(ScoringFactor.DATA_SENSITIVITY)
        for data_type in DataType:
            assert table.score_for(data_type_key(data_type.value)) is not None
