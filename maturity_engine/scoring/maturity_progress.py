"""
Maturity Progress Tracking
maturity_engine/scoring/maturity_progress.py

Progress over a chronological series of (data index, AI score) points.

  improvement %  (last − first) / first × 100       (100 if first is 0 and last > 0)
  milestones     period start, every point moving ≥ 5 from the last
                 milestone, period end
  rate / month   (last − first) / period_months
  anomalies      |x − mean(window)| / std(window) ≥ 2 over the preceding
                 5 points; severity low < 2.5 ≤ medium < 3 ≤ high
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional, Sequence

import structlog

from maturity_engine.models.enumerations import TargetArea
from maturity_engine.models.progress import MaturityGoal, MaturityPoint
from maturity_engine.scoring.distribution import DistributionStats, analyze_distribution
from maturity_engine.scoring.utils import as_number, mean, population_std_dev, to_decimal

logger = structlog.get_logger(__name__)

MILESTONE_STEP = 5.0
ANOMALY_WINDOW = 5
ANOMALY_Z = 2.0


@dataclass(frozen=True)
class Milestone:
    index: int
    data_maturity_index: Decimal
    ai_maturity_score: Decimal
    label: Optional[str] = None


@dataclass(frozen=True)
class GoalTracking:
    goal_type: TargetArea
    current_score: Decimal
    target_score: Decimal
    variance: Decimal
    variance_pct: Decimal
    progress_rate_per_month: Decimal
    months_to_target: Optional[Decimal]     # None when the trend never reaches it
    on_track: bool


@dataclass(frozen=True)
class MaturityAnomaly:
    index: int
    score_type: str                         # data | ai
    anomaly_type: str                       # SPIKE | DROP
    severity: str                           # LOW | MEDIUM | HIGH
    value: Decimal
    window_mean: Decimal
    z_score: Decimal


@dataclass(frozen=True)
class MaturityProgress:
    data_points_count: int
    start_data_maturity: Decimal
    end_data_maturity: Decimal
    start_ai_maturity: Decimal
    end_ai_maturity: Decimal
    data_improvement_pct: Decimal
    ai_improvement_pct: Decimal
    milestones: List[Milestone]
    goal_tracking: List[GoalTracking]
    data_distribution: DistributionStats
    ai_distribution: DistributionStats
    anomalies: List[MaturityAnomaly] = field(default_factory=list)


def improvement_pct(start: float, end: float) -> float:
    if start > 0:
        return (end - start) / start * 100
    return 100.0 if end > 0 else 0.0


def find_milestones(points: Sequence[MaturityPoint]) -> List[Milestone]:
    if not points:
        return []

    def milestone(i: int, label: Optional[str]) -> Milestone:
        p = points[i]
        return Milestone(
            index=i,
            data_maturity_index=to_decimal(p.data_maturity_index),
            ai_maturity_score=to_decimal(p.ai_maturity_score),
            label=label or p.label,
        )

    milestones = [milestone(0, "Period start")]
    previous = points[0]
    for i in range(1, len(points) - 1):
        p = points[i]
        if (
            abs(p.data_maturity_index - previous.data_maturity_index) >= MILESTONE_STEP
            or abs(p.ai_maturity_score - previous.ai_maturity_score) >= MILESTONE_STEP
        ):
            milestones.append(milestone(i, None))
            previous = p
    if len(points) > 1:
        milestones.append(milestone(len(points) - 1, "Period end"))
    return milestones


def _severity(z: float) -> str:
    if z >= 3:
        return "HIGH"
    if z >= 2.5:
        return "MEDIUM"
    return "LOW"


def detect_anomalies(points: Sequence[MaturityPoint]) -> List[MaturityAnomaly]:
    """Flag points deviating ≥ 2σ from the mean of the preceding window."""
    anomalies = []
    series = {
        "data": [p.data_maturity_index for p in points],
        "ai": [p.ai_maturity_score for p in points],
    }
    for i in range(ANOMALY_WINDOW, len(points)):
        for score_type, values in series.items():
            window = values[i - ANOMALY_WINDOW:i]
            window_mean = mean(window)
            # Flat history: measure deviation in raw points
            std = population_std_dev(window) or 1.0
            z = abs(values[i] - window_mean) / std
            if z >= ANOMALY_Z:
                anomalies.append(
                    MaturityAnomaly(
                        index=i,
                        score_type=score_type,
                        anomaly_type="SPIKE" if values[i] > window_mean else "DROP",
                        severity=_severity(z),
                        value=to_decimal(values[i]),
                        window_mean=to_decimal(window_mean),
                        z_score=to_decimal(z),
                    )
                )
    return anomalies


def track_goals(
    goals: Sequence[MaturityGoal],
    points: Sequence[MaturityPoint],
    period_months: Optional[float],
) -> List[GoalTracking]:
    months = as_number(period_months, 0.0)
    first = points[0] if points else None
    last = points[-1] if points else None

    tracking = []
    for goal in goals:
        if goal.goal_type is TargetArea.DATA:
            current = last.data_maturity_index if last else 0.0
            start = first.data_maturity_index if first else 0.0
        else:
            current = last.ai_maturity_score if last else 0.0
            start = first.ai_maturity_score if first else 0.0

        rate = (current - start) / months if len(points) >= 2 and months > 0 else 0.0
        variance = goal.target_score - current
        variance_pct = variance / goal.target_score * 100 if goal.target_score > 0 else 0.0

        if variance <= 0:
            months_to_target: Optional[float] = 0.0
        elif rate > 0:
            months_to_target = variance / rate
        else:
            months_to_target = None

        remaining = as_number(goal.months_until_target)
        if months_to_target is not None and remaining is not None and remaining > 0:
            on_track = months_to_target <= remaining
        else:
            on_track = variance <= 0

        tracking.append(
            GoalTracking(
                goal_type=goal.goal_type,
                current_score=to_decimal(current),
                target_score=to_decimal(goal.target_score),
                variance=to_decimal(variance),
                variance_pct=to_decimal(variance_pct),
                progress_rate_per_month=to_decimal(rate, 3),
                months_to_target=to_decimal(months_to_target) if months_to_target is not None else None,
                on_track=on_track,
            )
        )
    return tracking


def track_maturity_progress(
    history: Sequence[Any],
    goals: Optional[Sequence[Any]] = None,
    period_months: Optional[float] = None,
) -> MaturityProgress:
    """
    Summarise progress across a chronological maturity history.

    Args:
        history: MaturityPoint, or objects/mappings with data_maturity_index
            and ai_maturity_score, oldest first
        goals: Optional MaturityGoal records
        period_months: Time spanned by ``history``; drives progress rates

    Returns:
        MaturityProgress; an empty history yields zeros and no milestones
    """
    points = [MaturityPoint.model_validate(h, from_attributes=True) for h in history or []]
    goal_models = [MaturityGoal.model_validate(g, from_attributes=True) for g in goals or []]

    first = points[0] if points else MaturityPoint()
    last = points[-1] if points else MaturityPoint()

    anomalies = detect_anomalies(points)
    progress = MaturityProgress(
        data_points_count=len(points),
        start_data_maturity=to_decimal(first.data_maturity_index),
        end_data_maturity=to_decimal(last.data_maturity_index),
        start_ai_maturity=to_decimal(first.ai_maturity_score),
        end_ai_maturity=to_decimal(last.ai_maturity_score),
        data_improvement_pct=to_decimal(
            improvement_pct(first.data_maturity_index, last.data_maturity_index)
        ),
        ai_improvement_pct=to_decimal(
            improvement_pct(first.ai_maturity_score, last.ai_maturity_score)
        ),
        milestones=find_milestones(points),
        goal_tracking=track_goals(goal_models, points, period_months),
        data_distribution=analyze_distribution([p.data_maturity_index for p in points]),
        ai_distribution=analyze_distribution([p.ai_maturity_score for p in points]),
        anomalies=anomalies,
    )

    logger.info(
        "maturity_progress_tracked",
        data_points=len(points),
        milestones=len(progress.milestones),
        anomalies=len(anomalies),
        goals=len(goal_models),
    )
    return progress
