# tests/test_simulation.py
"""
Tests for the strategic decision simulator and the investment simulation.
"""

from decimal import ROUND_HALF_UP, Decimal

import pytest

from maturity_engine.config import Settings
from maturity_engine.models.enumerations import (
    InvestmentLevel,
    MarketConditions,
    TargetArea,
)
from maturity_engine.models.simulation import (
    InvestmentScenario,
    ScenarioParameters,
    SimulationContext,
)
from maturity_engine.scoring.investment_simulation import (
    compare_investment_scenarios,
    diminishing_factor,
    risk_indicator,
    simulate_investment_impact,
)
from maturity_engine.scoring.strategic_simulation import (
    StrategicDecisionSimulator,
    compare_outcomes,
    define_strategic_scenario,
    run_scenarios,
)


@pytest.fixture
def context():
    return SimulationContext(
        current_data_maturity=40,
        current_ai_maturity=30,
        current_revenue=10_000_000,
        current_profit=1_200_000,
    )


# ---------------------------------------------------------------------------
# Strategic decision simulator
# ---------------------------------------------------------------------------

class TestDefineScenario:

    def test_defaults(self):
        scenario = define_strategic_scenario("Base")
        assert scenario.parameters == ScenarioParameters()
        assert scenario.parameters.horizon_years == 5

    def test_partial_mapping_fills_defaults(self):
        scenario = define_strategic_scenario(
            "Push", {"investment_level": "high", "horizon_years": None}
        )
        assert scenario.parameters.investment_level is InvestmentLevel.HIGH
        assert scenario.parameters.horizon_years == 5


class TestStrategicDecisionSimulator:

    def test_deterministic(self, settings, context):
        scenario = define_strategic_scenario("Base")
        first = StrategicDecisionSimulator(scenario, context, settings).run()
        second = StrategicDecisionSimulator(scenario, context, settings).run()
        assert first == second

    def test_yearly_series_length(self, settings, context):
        outcome = StrategicDecisionSimulator(define_strategic_scenario("Base"), context, settings).run()
        assert [y.year for y in outcome.yearly] == [1, 2, 3, 4, 5]
        assert outcome.end_valuation == outcome.yearly[-1].valuation

    @pytest.mark.parametrize("horizon, expected", [(0, 1), (15, 10), (3, 3)])
    def test_horizon_clamped(self, settings, context, horizon, expected):
        scenario = define_strategic_scenario("H", {"horizon_years": horizon})
        outcome = StrategicDecisionSimulator(scenario, context, settings).run()
        assert outcome.horizon_years == expected
        assert len(outcome.yearly) == expected

    def test_maturity_grows_within_bounds(self, settings, context):
        scenario = define_strategic_scenario(
            "Aggressive", {"investment_level": "high", "adoption_pace": "aggressive",
                           "market_conditions": "growth", "horizon_years": 10}
        )
        outcome = StrategicDecisionSimulator(scenario, context, settings).run()
        data = [y.data_maturity for y in outcome.yearly]
        assert data == sorted(data)
        assert all(Decimal("0") <= d <= Decimal("100") for d in data)

    def test_higher_investment_reaches_higher_maturity(self, settings, context):
        low = StrategicDecisionSimulator(
            define_strategic_scenario("Low", {"investment_level": "low"}), context, settings
        ).run()
        high = StrategicDecisionSimulator(
            define_strategic_scenario("High", {"investment_level": "high"}), context, settings
        ).run()
        assert high.end_data_maturity > low.end_data_maturity
        assert high.end_ai_maturity > low.end_ai_maturity

    def test_volatile_market_is_riskier(self, settings, context):
        stable = StrategicDecisionSimulator(define_strategic_scenario("S"), context, settings).run()
        volatile = StrategicDecisionSimulator(
            define_strategic_scenario("V", {"market_conditions": MarketConditions.VOLATILE}),
            context,
            settings,
        ).run()
        assert volatile.avg_risk_over_horizon > stable.avg_risk_over_horizon

    def test_competitor_investment_lowers_position(self, settings, context):
        quiet = StrategicDecisionSimulator(define_strategic_scenario("Q"), context, settings).run()
        pressured = StrategicDecisionSimulator(
            define_strategic_scenario("P", {"competitive_action": "invests_heavily"}),
            context,
            settings,
        ).run()
        assert pressured.end_competitive_score < quiet.end_competitive_score

    def test_valuation_calibrated_to_current(self, settings, context):
        scenario = define_strategic_scenario("Base")
        one = StrategicDecisionSimulator(
            scenario, context.model_copy(update={"current_valuation": 20_000_000}), settings
        ).run()
        two = StrategicDecisionSimulator(
            scenario, context.model_copy(update={"current_valuation": 40_000_000}), settings
        ).run()
        ratio = float(two.end_valuation) / float(one.end_valuation)
        assert ratio == pytest.approx(2.0, rel=1e-4)

    def test_smoothing_factor_from_settings(self, context):
        scenario = define_strategic_scenario("Base")
        smooth = StrategicDecisionSimulator(scenario, context, Settings(_env_file=None)).run()
        snap = StrategicDecisionSimulator(
            scenario, context, Settings(_env_file=None, SIMULATION_SMOOTHING=1.0)
        ).run()
        assert snap.yearly[0].competitive_score > smooth.yearly[0].competitive_score

    def test_investment_reported_against_profit(self, settings, context):
        scenario = define_strategic_scenario("Funded", {"investment_amount": 1_000_000})
        outcome = StrategicDecisionSimulator(scenario, context, settings).run()

        assert outcome.investment_amount == Decimal("1000000.00")
        assert outcome.net_profit_after_investment == (
            outcome.total_profit_over_horizon - Decimal("1000000.00")
        )
        expected = (outcome.total_profit_over_horizon / Decimal("1000000")).quantize(
            Decimal("0.001"), rounding=ROUND_HALF_UP
        )
        assert outcome.profit_to_investment == expected

    @pytest.mark.parametrize("amount", [None, -50_000])
    def test_no_investment_reported(self, settings, context, amount):
        scenario = define_strategic_scenario("Unfunded", {"investment_amount": amount})
        outcome = StrategicDecisionSimulator(scenario, context, settings).run()
        assert outcome.investment_amount is None
        assert outcome.net_profit_after_investment is None
        assert outcome.profit_to_investment is None

    def test_zero_investment_has_no_multiple(self, settings, context):
        scenario = define_strategic_scenario("Free", {"investment_amount": 0})
        outcome = StrategicDecisionSimulator(scenario, context, settings).run()
        assert outcome.net_profit_after_investment == outcome.total_profit_over_horizon
        assert outcome.profit_to_investment is None

    def test_context_from_mapping(self, settings):
        outcome = StrategicDecisionSimulator(
            define_strategic_scenario("Base"),
            {"current_data_maturity": 50, "current_ai_maturity": 50, "current_revenue": 1_000_000},
            settings,
        ).run()
        # no profit supplied: 10% baseline margin plus the maturity uplift
        assert outcome.yearly[0].profit > outcome.yearly[0].revenue * Decimal("0.10")


class TestCompareOutcomes:

    def test_identical_scenarios_keep_input_order(self, settings, context):
        scenarios = [define_strategic_scenario("A"), define_strategic_scenario("B")]
        comparison = run_scenarios(scenarios, context, settings)["comparison"]

        assert [r.scenario_name for r in comparison.ranking] == ["A", "B"]
        assert [r.rank for r in comparison.ranking] == [1, 2]
        assert comparison.best_balanced == 0
        assert comparison.best_by_profit == 0
        assert comparison.best_by_risk == 0
        # risk leader equals profit leader, so only profit + balance are recommended
        assert [r.objective for r in comparison.recommendations] == ["maximize_profit", "balance"]

    def test_empty(self):
        comparison = compare_outcomes([])
        assert comparison.ranking == []
        assert comparison.best_balanced is None
        assert comparison.recommendations == []

    def test_ranking_by_composite(self, settings, context):
        scenarios = [
            define_strategic_scenario("Cautious", {"investment_level": "low",
                                                   "market_conditions": "volatile"}),
            define_strategic_scenario("Bold", {"investment_level": "high",
                                               "adoption_pace": "aggressive"}),
        ]
        result = run_scenarios(scenarios, context, settings)
        comparison = result["comparison"]

        assert len(result["outcomes"]) == 2
        assert comparison.ranking[0].scenario_name == "Bold"
        assert comparison.best_by_profit == 1
        scores = [r.composite_score for r in comparison.ranking]
        assert scores == sorted(scores, reverse=True)


# ---------------------------------------------------------------------------
# Investment simulation
# ---------------------------------------------------------------------------

class TestInvestmentSimulation:

    def test_diminishing_factor(self):
        assert diminishing_factor(0, 500_000) == 1.0
        assert diminishing_factor(10 ** 9, 500_000) == pytest.approx(0.65)
        assert diminishing_factor(100, 0) == 1.0

    def test_zero_investment(self, settings):
        result = simulate_investment_impact(InvestmentScenario(), 40, 30, settings)
        assert result.simulated_data_maturity_improvement == Decimal("0.00")
        assert result.projected_revenue_increase == Decimal("0.00")
        assert result.projected_profit_increase == Decimal("0.00")
        assert result.return_per_unit == Decimal("0.00")

    def test_data_only_investment(self, settings):
        scenario = InvestmentScenario(investment_amount=180_000, target_area=TargetArea.DATA)
        result = simulate_investment_impact(scenario, 40, 30, settings)
        assert result.simulated_ai_maturity_improvement == Decimal("0.00")
        assert result.simulated_data_maturity_improvement == Decimal("8.94")
        assert result.projected_data_maturity == Decimal("48.94")
        assert result.projected_revenue_increase > 0

    def test_gain_capped_by_headroom(self, settings):
        scenario = InvestmentScenario(investment_amount=5_000_000, target_area=TargetArea.AI)
        result = simulate_investment_impact(scenario, 50, 99, settings)
        assert result.simulated_ai_maturity_improvement == Decimal("1.00")
        assert result.projected_ai_maturity == Decimal("100.00")

    def test_split_investment(self, settings):
        scenario = InvestmentScenario(investment_amount=500_000)
        result = simulate_investment_impact(scenario, 20, 20, settings)
        assert result.simulated_data_maturity_improvement > 0
        assert result.simulated_ai_maturity_improvement > 0

    def test_time_to_benefit_and_annualised(self, settings):
        scenario = InvestmentScenario(investment_amount=300_000, time_horizon_years=3)
        result = simulate_investment_impact(scenario, 40, 40, settings)
        assert result.effective_time_to_benefit_years == Decimal("2.70")
        expected = result.projected_profit_increase / 3
        assert abs(result.annualised_benefit - expected) <= Decimal("0.01")

    def test_efficiency_from_settings(self):
        scenario = InvestmentScenario(investment_amount=100_000, target_area=TargetArea.DATA)
        cheap = simulate_investment_impact(
            scenario, 0, 0, Settings(_env_file=None, DATA_EFFICIENCY=9000)
        )
        default = simulate_investment_impact(scenario, 0, 0, Settings(_env_file=None))
        assert cheap.simulated_data_maturity_improvement > default.simulated_data_maturity_improvement

    @pytest.mark.parametrize("time, rpu, expected", [
        (1.0, 2.0, "low"),
        (2.0, 0.7, "medium"),
        (4.0, 0.1, "high"),
        (2.0, 2.0, "medium"),
    ])
    def test_risk_indicator(self, time, rpu, expected):
        assert risk_indicator(time, rpu) == expected


class TestCompareInvestmentScenarios:

    def test_ranks(self, settings):
        results = [
            simulate_investment_impact(InvestmentScenario(investment_amount=100_000), 40, 40, settings),
            simulate_investment_impact(InvestmentScenario(investment_amount=900_000), 40, 40, settings),
        ]
        comparison = compare_investment_scenarios(results)
        assert comparison.best_by_impact == 1
        assert comparison.best_by_cost_effectiveness == 0
        assert comparison.scenarios[1].rank_by_impact == 1
        assert comparison.scenarios[0].rank_by_cost_effectiveness == 1

    def test_ties_keep_input_order(self, settings):
        result = simulate_investment_impact(InvestmentScenario(investment_amount=250_000), 30, 30, settings)
        comparison = compare_investment_scenarios([result, result, result])
        assert comparison.best_by_impact == 0
        assert [s.rank_by_impact for s in comparison.scenarios] == [1, 2, 3]

    def test_empty(self):
        comparison = compare_investment_scenarios([])
        assert comparison.scenarios == []
        assert comparison.best_by_impact is None
