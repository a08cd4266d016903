# tests/test_acquisition_scanner.py
"""
Tests for the acquisition opportunity scanner: filters, undervaluation and
attractiveness ranking.
"""

from decimal import Decimal

import pytest

from maturity_engine.models.benchmark import IndustryBenchmark
from maturity_engine.models.portfolio import CompanySnapshot
from maturity_engine.scoring.acquisition_scanner import (
    apply_acquisition_filters,
    identify_undervalued_companies,
    scan_acquisition_targets,
    score_acquisition_targets,
)


@pytest.fixture
def candidates():
    return [
        {"organisation_id": "a", "name": "Alpha", "industry": "Retail",
         "current_valuation": 1_000_000, "data_maturity_index": 75, "ai_maturity_score": 75},
        {"organisation_id": "b", "name": "Beta", "industry": " retail ",
         "current_valuation": 1_000_000, "potential_valuation": 1_500_000,
         "data_maturity_index": 40, "ai_maturity_score": 20},
        {"organisation_id": "c", "name": "Gamma", "industry": "Finance",
         "current_valuation": 1_000_000, "data_maturity_index": 30, "ai_maturity_score": 30},
        {"organisation_id": "d", "name": "Delta", "industry": "Finance",
         "current_valuation": 0, "data_maturity_index": 90, "ai_maturity_score": 90},
    ]


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

class TestFilters:

    def test_no_filters_keeps_everyone(self, candidates):
        assert len(apply_acquisition_filters(candidates)) == 4

    def test_industry_ignores_case_and_padding(self, candidates):
        kept = apply_acquisition_filters(candidates, {"industry": "RETAIL"})
        assert [c.organisation_id for c in kept] == ["a", "b"]

    def test_blank_industry_ignored(self, candidates):
        assert len(apply_acquisition_filters(candidates, {"industry": "  "})) == 4

    def test_bounds_inclusive(self, candidates):
        kept = apply_acquisition_filters(
            candidates, {"min_valuation": 1_000_000, "min_data_maturity": 40, "max_ai_maturity": 75}
        )
        assert [c.organisation_id for c in kept] == ["a", "b"]

    def test_missing_metric_counts_as_zero(self):
        kept = apply_acquisition_filters([{"organisation_id": "x"}], {"min_ai_maturity": 1})
        assert kept == []


# ---------------------------------------------------------------------------
# Undervaluation
# ---------------------------------------------------------------------------

class TestIdentifyUndervalued:

    def test_ranked_by_undervaluation(self, candidates):
        found = identify_undervalued_companies(candidates)
        assert [u.organisation_id for u in found] == ["b", "a", "c"]

    def test_supplied_potential_used(self, candidates):
        beta = identify_undervalued_companies(candidates)[0]
        assert beta.potential_valuation == Decimal("1500000.00")
        assert beta.valuation_upside_pct == Decimal("50.00")
        assert beta.undervaluation_score == Decimal("100.00")
        assert beta.rationale == "Potential upside 50.0% vs current valuation"

    def test_implied_potential_from_maturity(self, candidates):
        alpha = identify_undervalued_companies(candidates)[1]
        assert alpha.potential_valuation == Decimal("1200000.00")
        assert alpha.undervaluation_score == Decimal("40.00")

    def test_overvalued_scores_zero_without_rationale(self, candidates):
        gamma = identify_undervalued_companies(candidates)[2]
        assert gamma.valuation_upside < 0
        assert gamma.undervaluation_score == Decimal("0.00")
        assert gamma.rationale is None

    def test_zero_valuation_skipped(self, candidates):
        assert "d" not in {u.organisation_id for u in identify_undervalued_companies(candidates)}

    def test_industry_benchmark_scales_implied_valuation(self):
        company = {"organisation_id": "t", "industry": "Technology",
                   "current_valuation": 1_000_000, "data_maturity_index": 75, "ai_maturity_score": 75}
        hot = IndustryBenchmark(id="technology", valuation_multiplier=1.5)
        adjusted = identify_undervalued_companies([company], {" technology": hot})[0]
        # uplift 0.2 × 1.5
        assert adjusted.potential_valuation == Decimal("1300000.00")
        other = identify_undervalued_companies([company], {"retail": hot})[0]
        assert other.potential_valuation == Decimal("1200000.00")

    def test_ties_keep_input_order(self):
        twins = [
            {"organisation_id": oid, "current_valuation": 1_000_000,
             "data_maturity_index": 60, "ai_maturity_score": 60}
            for oid in ("first", "second", "third")
        ]
        assert [u.organisation_id for u in identify_undervalued_companies(twins)] == [
            "first", "second", "third",
        ]


# ---------------------------------------------------------------------------
# Attractiveness
# ---------------------------------------------------------------------------

class TestScoreTargets:

    def alpha(self, candidates):
        return identify_undervalued_companies(candidates[:1])

    def test_neutral_defaults_without_candidate(self, candidates):
        target = score_acquisition_targets(self.alpha(candidates))[0]
        # 0.35 × 40 + 0.25 × 0 + 0.2 × 50 + 0.2 × 100
        assert target.acquisition_attractiveness_score == Decimal("44.00")
        assert target.revenue_upside is None
        assert target.rationale == "Undervaluation 40; growth potential 0; risk adj 50."

    @pytest.mark.parametrize("extra, expected", [
        ({"revenue_upside": 25_000_000}, Decimal("56.50")),
        ({"revenue_upside": 500_000_000}, Decimal("69.00")),
        ({"overall_risk_score": 20}, Decimal("50.00")),
        ({"total_investment": 2_000_000}, Decimal("40.00")),
        ({"total_investment": 50_000_000}, Decimal("24.00")),
    ])
    def test_components(self, candidates, extra, expected):
        snapshot = CompanySnapshot(organisation_id="a", **extra)
        target = score_acquisition_targets(self.alpha(candidates), {"a": snapshot})[0]
        assert target.acquisition_attractiveness_score == expected

    def test_candidates_as_sequence(self, candidates):
        enriched = [{"organisation_id": "a", "risk_level": "LOW", "revenue_upside": 1_000_000}]
        target = score_acquisition_targets(self.alpha(candidates), enriched)[0]
        assert target.risk_level == "LOW"
        assert target.revenue_upside == Decimal("1000000.00")

    def test_scan_pipeline_ranks_by_attractiveness(self, candidates):
        targets = scan_acquisition_targets(candidates, {"industry": "retail"})
        assert [t.organisation_id for t in targets] == ["b", "a"]
        scores = [t.acquisition_attractiveness_score for t in targets]
        assert scores == sorted(scores, reverse=True)
