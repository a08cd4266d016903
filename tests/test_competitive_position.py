# tests/test_competitive_position.py
"""
Tests for competitive risk, competitive advantage and peer insights.
"""

from decimal import Decimal

from maturity_engine.models.competitive import MaturityScores
from maturity_engine.models.enumerations import RiskLabel
from maturity_engine.scoring.competitive_position import (
    CompetitivePositionAnalyzer,
    calculate_competitive_advantage,
    calculate_competitive_risk,
)


class TestCompetitiveRisk:

    def test_ahead_contributes_no_risk(self):
        risk = calculate_competitive_risk(90, 90, 40, 40)
        assert risk.score == Decimal("0.00")
        assert risk.level is RiskLabel.LOW

    def test_mixed_position_counts_only_the_shortfall(self):
        # 20 points behind on AI, far ahead on data
        risk = calculate_competitive_risk(100, 40, 50, 60)
        assert risk.score == Decimal("12.00")

    def test_levels(self):
        assert calculate_competitive_risk(40, 40, 80, 80).level is RiskLabel.MEDIUM
        assert calculate_competitive_risk(40, 40, 90, 90).level is RiskLabel.HIGH

    def test_score_capped(self):
        assert calculate_competitive_risk(0, 0, 100, 100).score == Decimal("100.00")


class TestCompetitiveAdvantage:

    def test_no_peers_is_neutral(self):
        assert calculate_competitive_advantage(10, 95, []) == Decimal("50.00")

    def test_equal_to_single_peer(self):
        peer = [MaturityScores(data_maturity=60, ai_maturity=60)]
        # mean lead 0, leader term 20 × (0.5 + 0.5)
        assert calculate_competitive_advantage(60, 60, peer) == Decimal("70.00")

    def test_zero_maturity_peers(self):
        peers = [MaturityScores(data_maturity=0, ai_maturity=0)]
        advantage = calculate_competitive_advantage(50, 50, peers)
        assert Decimal("0") <= advantage <= Decimal("100")


class TestCompetitivePositionAnalyzer:

    def test_no_competitors(self):
        report = CompetitivePositionAnalyzer().analyze({"data_maturity": 40, "ai_maturity": 70})
        assert report.competitive_advantage_score == Decimal("50.00")
        assert report.competitive_risk_score == Decimal("0.00")
        assert report.competitive_risk_level is RiskLabel.LOW
        assert report.strengths == []
        assert report.weaknesses == []
        assert report.comparison["competitor_count"] == 0

    def test_behind_strong_peer(self):
        report = CompetitivePositionAnalyzer().analyze(
            MaturityScores(data_maturity=40, ai_maturity=40),
            [MaturityScores(name="Rival", data_maturity=90, ai_maturity=90)],
        )
        assert report.competitive_risk_score == Decimal("60.00")
        assert report.competitive_risk_level is RiskLabel.HIGH
        assert report.competitive_advantage_score == Decimal("17.78")
        assert report.weaknesses == [
            "Data maturity below competitor average.",
            "AI maturity below competitor average.",
            "Limited competitive advantage; consider accelerating data and AI initiatives.",
            "Competitive risk is high; competitors may be pulling ahead.",
        ]
        assert report.strengths == []

    def test_ahead_of_peers(self):
        report = CompetitivePositionAnalyzer().analyze(
            {"data_maturity": 90, "ai_maturity": 90},
            [{"data_maturity": 40, "ai_maturity": 40}, {"data_maturity": 60, "ai_maturity": 60}],
        )
        assert report.comparison["avg_competitor_data"] == Decimal("50.00")
        assert report.competitive_risk_score == Decimal("0.00")
        assert report.competitive_advantage_score == Decimal("94.00")
        assert "Strong overall competitive advantage vs peers." in report.strengths
        assert "Competitive risk is low; position is relatively secure." in report.strengths

    def test_peer_scores_clamped(self):
        report = CompetitivePositionAnalyzer().analyze(
            {"data_maturity": 50, "ai_maturity": 50},
            [{"data_maturity": 180, "ai_maturity": -20}],
        )
        peer = report.competitors[0]
        assert peer.data_maturity == 100.0
        assert peer.ai_maturity == 0.0
