# tests/test_industry_benchmark.py
"""
Tests for benchmark lookup and peer comparison.
"""

from decimal import Decimal

import pytest

from maturity_engine.models.benchmark import IndustryBenchmark
from maturity_engine.models.enumerations import BenchmarkComparison
from maturity_engine.scoring.industry_benchmark import compare_to_benchmarks, get_benchmark


class TestGetBenchmark:

    @pytest.mark.parametrize("name, expected", [
        ("technology", "technology"),
        ("Software & Tech", "technology"),
        ("Retail Banking", "finance"),
        ("Healthcare", "healthcare"),
        ("Discount retail", "retail"),
        ("Manufacturing", "manufacturing"),
        ("Agriculture", "default"),
        (None, "default"),
    ])
    def test_resolution(self, name, expected):
        assert get_benchmark(name).id == expected


class TestCompareToBenchmarks:

    def test_above_and_at_average(self):
        report = compare_to_benchmarks(60, 41)
        assert report.data.comparison is BenchmarkComparison.ABOVE
        assert report.data.pct_diff == Decimal("33.33")
        assert report.ai.comparison is BenchmarkComparison.AT
        assert report.strengths == ["Data maturity is above industry average (+33.3%)."]
        assert report.weaknesses == []

    def test_below_average(self):
        report = compare_to_benchmarks(20, 20, get_benchmark("technology"))
        assert report.industry == "Technology"
        assert report.data.comparison is BenchmarkComparison.BELOW
        assert len(report.weaknesses) == 2

    def test_tolerance_is_three_points(self):
        report = compare_to_benchmarks(48, 37)
        assert report.data.comparison is BenchmarkComparison.AT
        assert report.ai.comparison is BenchmarkComparison.AT

    def test_zero_average(self):
        benchmark = IndustryBenchmark(data_average=0, ai_average=0)
        report = compare_to_benchmarks(10, 0, benchmark)
        assert report.data.pct_diff == Decimal("100.00")
        assert report.ai.pct_diff == Decimal("0.00")

    def test_scores_clamped(self):
        report = compare_to_benchmarks(250, -5)
        assert report.data.organisation_score == Decimal("100.00")
        assert report.ai.organisation_score == Decimal("0.00")
