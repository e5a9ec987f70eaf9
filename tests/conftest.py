"""
Pytest configuration and fixtures for RiskPilot tests.

Provides helper factories and common fixtures built on the bundled
knowledge base.
"""
import shutil
from pathlib import Path
from typing import Optional

import pytest
import yaml

from riskpilot.engine import RiskAnalysisEngine
from riskpilot.models import (
    AnalysisContext,
    AnalysisRequest,
    ComponentScores,
)
from riskpilot.packs import DEFAULT_KNOWLEDGE_BASE_DIR, load_knowledge_base


# =============================================================================
# Factory Helpers
# =============================================================================

def make_request(
    use_case_category: Optional[str] = "credit-scoring",
    jurisdictions=("EU",),
    data_types=("financial_data",),
    decision_impact: Optional[str] = "significant-economic",
    has_human_oversight: bool = False,
    is_transparent: bool = False,
    industry: Optional[str] = "financial-services",
) -> AnalysisRequest:
    """Create an AnalysisRequest; defaults are the EU credit-scoring case."""
    return AnalysisRequest(
        use_case_category=use_case_category,
        jurisdictions=tuple(jurisdictions),
        data_types=tuple(data_types),
        decision_impact=decision_impact,
        has_human_oversight=has_human_oversight,
        is_transparent=is_transparent,
        industry=industry,
    )


def make_payload(**overrides) -> dict:
    """Create a camelCase request payload; defaults are the EU credit-scoring case."""
    payload = {
        "useCaseCategory": "credit-scoring",
        "jurisdictions": ["EU"],
        "dataTypes": ["financial_data"],
        "decisionImpact": "significant-economic",
        "hasHumanOversight": False,
        "isTransparent": False,
        "industry": "financial-services",
    }
    payload.update(overrides)
    return payload


def make_context(
    risk_level: Optional[str] = "High",
    regulation_jurisdictions=(),
    **request_fields,
) -> AnalysisContext:
    """Create an AnalysisContext from make_request() fields plus derived facts."""
    return AnalysisContext.from_request(
        make_request(**request_fields),
        risk_level=risk_level,
        regulation_jurisdictions=tuple(regulation_jurisdictions),
    )


def make_scores(
    use_case: int = 0,
    jurisdiction: int = 0,
    data: int = 0,
    impact: int = 0,
    transparency: int = 0,
) -> ComponentScores:
    """Create ComponentScores."""
    return ComponentScores(
        use_case_score=use_case,
        jurisdiction_score=jurisdiction,
        data_score=data,
        impact_score=impact,
        transparency_score=transparency,
    )


def copy_knowledge_base(target: Path) -> Path:
    """Copy the bundled knowledge base documents into `target`."""
    target.mkdir(parents=True, exist_ok=True)
    for path in DEFAULT_KNOWLEDGE_BASE_DIR.glob("*.yaml"):
        shutil.copy(path, target / path.name)
    return target


def read_yaml(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_yaml(path: Path, data: dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def kb():
    """The bundled knowledge base."""
    return load_knowledge_base()


@pytest.fixture(scope="session")
def framework(kb):
    return kb.framework


@pytest.fixture(scope="session")
def catalog(kb):
    return kb.catalog


@pytest.fixture(scope="session")
def rulebook(kb):
    return kb.rulebook


@pytest.fixture(scope="session")
def engine(kb):
    """Engine over the bundled knowledge base."""
    return RiskAnalysisEngine.from_knowledge_base(kb)


@pytest.fixture
def kb_dir(tmp_path):
    """A writable copy of the bundled knowledge base."""
    return copy_knowledge_base(tmp_path / "kb")
