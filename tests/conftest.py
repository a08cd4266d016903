# tests/conftest.py

"""
Pytest Fixtures - Shared audit inputs and configuration for all calculators

AUDIT FIXTURE REFERENCE:
- e2e_data_inputs: category scores 80 / 60 / 40 / 50 / 70 → index 60, stage 4
- strong_ai_inputs: every AI category at 100
- overlapping_rules: two rules covering the same point, declared in order
"""

import pytest

from maturity_engine.config import Settings
from maturity_engine.models.classification import RuleTable


# =============================================================================
# CONFIGURATION FIXTURES
# =============================================================================

@pytest.fixture
def settings():
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


# =============================================================================
# DATA AUDIT FIXTURES
# =============================================================================

@pytest.fixture
def e2e_data_inputs():
    """Data audit whose category scores average 80/60/40/50/70."""
    return {
        "collection": {
            "data_completeness_score": 80,
            "data_sources_identified": 8,
            "structured_data_pct": 80,
            "automated_collection": True,
            "collection_frequency": "weekly",
        },
        "storage": {
            "storage_types": ["database"],
            "cloud_vs_on_prem": "hybrid",
            "real_time_processing": False,
            "batch_processing": False,
            "scalability_rating": 5,
            "security_rating": 4,
            "accessibility_rating": 5,
        },
        "integration": {
            "integrated_systems_count": 10,
            "api_available": True,
            "pipeline_maturity": "manual",
            "etl_elt_process": False,
            "data_quality_checks": False,
            "real_time_sync": False,
        },
        "governance": {
            "data_ownership_defined": True,
            "data_quality_controls": True,
            "metadata_management": "none",
            "policies_documented": False,
            "compliance_framework": "GDPR",
            "data_catalog": False,
        },
        "accessibility": {
            "self_service_analytics": True,
            "real_time_data_access": False,
            "cross_functional_access": True,
            "role_based_access": True,
            "access_rating": 5,
            "reporting_tools": ["none"],
        },
    }


# =============================================================================
# AI AUDIT FIXTURES
# =============================================================================

@pytest.fixture
def strong_ai_inputs():
    """AI audit with every sub-item at its maximum."""
    return {
        "automation": {
            "automated_workflow_pct": 100,
            "workflow_automation_level": "full",
            "rule_based_automation": True,
            "process_automation_count": 20,
            "sophistication_rating": 5,
        },
        "ai_usage": {
            "predictive_models": True,
            "predictive_models_impact": "enterprise",
            "recommendation_systems": True,
            "recommendation_systems_impact": "enterprise",
            "nlp": True,
            "nlp_impact": "enterprise",
            "computer_vision": True,
            "computer_vision_impact": "enterprise",
            "ai_breadth_rating": 5,
            "ai_integration_rating": 5,
        },
        "deployment": {
            "deployment_mode": "enterprise_wide",
            "deployment_scope": "enterprise_wide",
            "decision_automation": "fully_autonomous",
            "production_workloads_count": 10,
            "scalability_rating": 5,
            "reliability_rating": 5,
        },
    }


# =============================================================================
# RULE TABLE FIXTURES
# =============================================================================

@pytest.fixture
def overlapping_rules():
    """Two rules that both contain (50, 50); 'first' is declared first."""
    return RuleTable.model_validate(
        {
            "version": "test-overlap",
            "rules": [
                {
                    "id": "first", "name": "First",
                    "data_index_min": 0, "data_index_max": 60,
                    "ai_score_min": 0, "ai_score_max": 60,
                    "classification_string": "First Match",
                    "risk": "Low", "opportunity": "A",
                },
                {
                    "id": "second", "name": "Second",
                    "data_index_min": 40, "data_index_max": 100,
                    "ai_score_min": 40, "ai_score_max": 100,
                    "classification_string": "Second Match",
                    "risk": "High", "opportunity": "B",
                },
            ],
        }
    )
