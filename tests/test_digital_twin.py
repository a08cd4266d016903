# tests/test_digital_twin.py
"""
Tests for the enterprise digital twin: state construction, simulation and
path optimisation.
"""

from decimal import Decimal

import pytest

from maturity_engine.models.enumerations import InterventionType, RiskLevel, TwinGoalType
from maturity_engine.models.twin import TwinContext, TwinIntervention
from maturity_engine.scoring.digital_twin import (
    CAUSAL_LINKS,
    EnterpriseDigitalTwin,
    build_digital_twin_state,
    intervention_effect,
    twin_risk_level,
)


def governance(intensity=1.0, duration=12):
    return {"id": "gov", "type": "governance", "target": "Data governance",
            "intensity": intensity, "duration_months": duration}


# ---------------------------------------------------------------------------
# State construction
# ---------------------------------------------------------------------------

class TestBuildState:

    def test_defaults(self):
        state = build_digital_twin_state()
        assert state.maturity.data_maturity_index == 50
        assert state.maturity.data_maturity_stage == 2
        assert state.maturity.ai_maturity_stage == 2
        assert state.financial.revenue == Decimal("5000000.00")
        assert state.financial.profit == Decimal("500000.00")
        assert state.financial.valuation == Decimal("12500000.00")
        assert state.risk.risk_level is RiskLevel.MEDIUM
        assert state.version == 1
        assert state.months_ahead == 0

    def test_graph_shape(self):
        state = build_digital_twin_state({"maturity": {"data_maturity_index": 72}})
        assert [n.id for n in state.nodes] == [
            "data_maturity", "ai_maturity", "revenue", "profit", "valuation", "risk",
        ]
        assert state.nodes[0].value == Decimal("72.00")
        assert len(state.edges) == len(CAUSAL_LINKS) == 5
        governance_edge = next(e for e in state.edges if e.target_id == "risk")
        assert governance_edge.strength == Decimal("-0.5")

    def test_values_clamped(self):
        state = build_digital_twin_state({
            "maturity": {"data_maturity_index": 140, "ai_maturity_stage": 12},
            "financial": {"revenue": -10, "profit_margin_pct": 150},
            "risk": {"overall_risk_score": -5},
        })
        assert state.maturity.data_maturity_index == 100
        assert state.maturity.ai_maturity_stage == 7
        assert state.financial.revenue == Decimal("0.00")
        assert state.financial.profit_margin_pct == Decimal("100.00")
        assert state.risk.risk_level is RiskLevel.LOW

    def test_supplied_valuation_and_level_kept(self):
        state = build_digital_twin_state(
            TwinContext(financial={"revenue": 1_000_000, "valuation": 4_000_000},
                        risk={"overall_risk_score": 20, "risk_level": "high"}),
            label="Q3",
        )
        assert state.financial.valuation == Decimal("4000000.00")
        assert state.risk.risk_level is RiskLevel.HIGH
        assert state.label == "Q3"

    def test_missing_sections(self):
        state = build_digital_twin_state({"financial": None, "capabilities": None})
        assert state.financial.revenue == Decimal("5000000.00")
        assert state.capabilities.gap_count == 0

    @pytest.mark.parametrize("score, level", [
        (61, RiskLevel.HIGH),
        (60, RiskLevel.MEDIUM),
        (36, RiskLevel.MEDIUM),
        (35, RiskLevel.LOW),
    ])
    def test_risk_level_bands(self, score, level):
        assert twin_risk_level(score) is level


# ---------------------------------------------------------------------------
# Interventions
# ---------------------------------------------------------------------------

class TestInterventionEffect:

    @pytest.mark.parametrize("kind, target, expected", [
        ("investment", "Data lake", (8.0, 0.0, 0.0)),
        ("investment", "ML platform", (0.0, 7.0, 0.0)),
        ("investment", "Office fit-out", (0.0, 0.0, 0.0)),
        ("governance", "Policy", (5.0, 0.0, -6.0)),
        ("technology", "Cloud", (3.0, 6.0, 0.0)),
        ("process", "Lean", (3.0, 4.0, 0.0)),
    ])
    def test_points_per_year(self, kind, target, expected):
        intervention = TwinIntervention(id="x", type=kind, target=target, intensity=1.0)
        assert intervention_effect(intervention) == pytest.approx(expected)

    def test_intensity_clamped(self):
        intervention = TwinIntervention(id="x", type=InterventionType.GOVERNANCE, intensity=3)
        assert intervention.intensity == 1.0


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

class TestSimulate:

    def test_no_interventions_one_year(self):
        twin = EnterpriseDigitalTwin("org-1")
        result = twin.simulate(12)
        state = result.state
        assert result.months_ahead == state.months_ahead == 12
        assert state.label == "simulated"
        assert state.financial.revenue == Decimal("5250000.00")
        assert state.financial.profit_margin_pct == Decimal("12.00")
        assert state.financial.profit == Decimal("630000.00")
        assert state.financial.valuation == Decimal("13650000.00")
        assert result.confidence_interval == (Decimal("0.75"), Decimal("0.95"))

    def test_governance_moves_data_and_risk(self):
        result = EnterpriseDigitalTwin("org-1").simulate(12, [governance()])
        maturity = result.state.maturity
        assert maturity.data_maturity_index == pytest.approx(55.0)
        assert maturity.data_maturity_stage == 4
        assert maturity.ai_maturity_stage == 4
        assert result.state.risk.overall_risk_score == pytest.approx(44.0)
        assert result.interventions_applied[0].type is InterventionType.GOVERNANCE

    def test_effect_limited_to_horizon(self):
        result = EnterpriseDigitalTwin("org-1").simulate(6, [governance(duration=24)])
        assert result.state.maturity.data_maturity_index == pytest.approx(52.5)

    def test_default_duration_is_a_year(self):
        result = EnterpriseDigitalTwin("org-1").simulate(24, [governance(duration=None)])
        assert result.state.maturity.data_maturity_index == pytest.approx(55.0)

    @pytest.mark.parametrize("months, expected", [(0, 1), (-4, 1), (90, 60), ("junk", 12)])
    def test_horizon_clamped(self, months, expected):
        assert EnterpriseDigitalTwin("org-1").simulate(months).months_ahead == expected

    def test_simulation_leaves_state_untouched(self):
        twin = EnterpriseDigitalTwin("org-1")
        before = twin.state
        twin.simulate(24, [governance()])
        assert twin.state is before

    def test_update_bumps_version_and_keeps_label(self):
        twin = EnterpriseDigitalTwin.from_context("org-1", {}, label="baseline")
        state = twin.update({"maturity": {"ai_maturity_score": 80}})
        assert state.version == 2
        assert state.label == "baseline"
        assert twin.state.maturity.ai_maturity_score == 80


# ---------------------------------------------------------------------------
# Path optimisation
# ---------------------------------------------------------------------------

class TestOptimizePath:

    def test_ai_stage_goal_schedules_sequential_actions(self):
        plan = EnterpriseDigitalTwin("org-1").optimize_path(
            {"type": "ai_maturity_stage", "target_value": 7, "horizon_months": 12}
        )
        assert [a.intervention.id for a in plan.actions] == ["opt-ai-1", "opt-data-1"]
        assert [(a.start_month, a.end_month) for a in plan.actions] == [(0, 12), (12, 12)]
        final = plan.projected_final_state.maturity
        assert final.ai_maturity_score == pytest.approx(55.6)
        assert final.data_maturity_index == pytest.approx(54.8)
        assert plan.confidence_score == Decimal("0.78")
        assert plan.total_duration_months == 12

    def test_stage_already_reached_needs_no_actions(self):
        plan = EnterpriseDigitalTwin("org-1").optimize_path(
            {"type": TwinGoalType.AI_MATURITY_STAGE, "target_value": 2}
        )
        assert plan.actions == []

    def test_data_stage_goal(self):
        plan = EnterpriseDigitalTwin("org-1").optimize_path(
            {"type": "data_maturity_stage", "target_value": 6, "horizon_months": 24}
        )
        assert [a.intervention.type for a in plan.actions] == [
            InterventionType.GOVERNANCE, InterventionType.TECHNOLOGY,
        ]
        assert plan.projected_final_state.risk.overall_risk_score < 50

    @pytest.mark.parametrize("horizon, expected", [(3, 6), (100, 48)])
    def test_horizon_clamped(self, horizon, expected):
        plan = EnterpriseDigitalTwin("org-1").optimize_path(
            {"type": "profit_increase_pct", "target_value": 10, "horizon_months": horizon}
        )
        assert plan.total_duration_months == expected
        assert plan.actions[-1].end_month == expected

    def test_risk_reduction_single_governance_action(self):
        plan = EnterpriseDigitalTwin("org-1").optimize_path(
            {"type": "risk_reduction", "horizon_months": 48, "minimize_risk": True}
        )
        assert len(plan.actions) == 1
        assert plan.actions[0].end_month == 12
        assert "Lower-risk path may slow goal achievement." in plan.risks
        assert len(plan.trade_offs) == 2

    def test_revenue_goal(self):
        plan = EnterpriseDigitalTwin("org-1").optimize_path(
            {"type": "revenue_increase_pct", "target_value": 20, "horizon_months": 12}
        )
        assert plan.actions[0].intervention.target == "AI products"
        assert plan.projected_final_state.financial.revenue > Decimal("5000000.00")
