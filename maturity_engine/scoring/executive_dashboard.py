"""
Executive Dashboard
maturity_engine/scoring/executive_dashboard.py

Collects the latest result of each calculator for one organisation into a
single display payload. Every source is optional and its section is None
when absent; maturity needs both the data and the AI result.

Sources may be the calculators' own result objects or plain mappings with
the same field names (e.g. rows read back from storage). Currency fields
come with a compact label (£1.20M) using the configured symbol.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.scoring.utils import as_number, format_currency, sum_decimals, to_decimal

logger = structlog.get_logger(__name__)

RISK_CATEGORIES = ("ai_misalignment", "infrastructure", "operational", "strategic")


@dataclass(frozen=True)
class DashboardMaturity:
    data_maturity_index: Decimal
    data_maturity_stage: int
    ai_maturity_score: Decimal
    ai_maturity_stage: int


@dataclass(frozen=True)
class DashboardClassification:
    classification_string: str
    matrix_x: Decimal
    matrix_y: Decimal
    risk: str
    opportunity: Optional[str] = None


@dataclass(frozen=True)
class DashboardFinancial:
    revenue_upside: Decimal
    profit_margin_expansion_value: Decimal
    cost_reduction: Decimal
    total_impact: Decimal
    revenue_upside_formatted: str
    margin_formatted: str
    cost_reduction_formatted: str
    total_formatted: str


@dataclass(frozen=True)
class DashboardROI:
    total_investment: Decimal
    expected_roi_pct: Optional[Decimal]
    payback_period_years: Optional[Decimal]
    total_investment_formatted: str


@dataclass(frozen=True)
class DashboardRisk:
    overall_risk_score: Decimal
    risk_level: str
    ai_misalignment: Decimal
    infrastructure: Decimal
    operational: Decimal
    strategic: Decimal


@dataclass(frozen=True)
class DashboardPhase:
    name: str
    estimated_cost: Decimal
    projected_impact_value: Decimal


@dataclass(frozen=True)
class DashboardRoadmap:
    phase_count: int
    total_estimated_cost: Decimal
    total_projected_impact: Decimal
    total_cost_formatted: str
    total_impact_formatted: str
    phases: List[DashboardPhase]


@dataclass(frozen=True)
class ExecutiveDashboard:
    organisation_id: str
    maturity: Optional[DashboardMaturity] = None
    classification: Optional[DashboardClassification] = None
    financial: Optional[DashboardFinancial] = None
    roi: Optional[DashboardROI] = None
    risk: Optional[DashboardRisk] = None
    roadmap: Optional[DashboardRoadmap] = None
    trends: Dict[str, Decimal] = field(default_factory=dict)


def _get(source: Any, name: str, default: Any = None) -> Any:
    if isinstance(source, Mapping):
        return source.get(name, default)
    return getattr(source, name, default)


def _amount(value: Any) -> Decimal:
    return to_decimal(as_number(value, 0.0))


def _optional_amount(value: Any) -> Optional[Decimal]:
    number = as_number(value)
    return None if number is None else to_decimal(number)


def _label(value: Any) -> str:
    return str(getattr(value, "value", value))


def _maturity(data: Any, ai: Any) -> Optional[DashboardMaturity]:
    if data is None or ai is None:
        return None
    return DashboardMaturity(
        data_maturity_index=_amount(_get(data, "maturity_index")),
        data_maturity_stage=int(as_number(_get(data, "maturity_stage"), 1)),
        ai_maturity_score=_amount(_get(ai, "maturity_score")),
        ai_maturity_stage=int(as_number(_get(ai, "maturity_stage"), 1)),
    )


def _classification(result: Any) -> Optional[DashboardClassification]:
    if result is None:
        return None
    opportunity = _get(result, "opportunity_classification")
    return DashboardClassification(
        classification_string=_get(result, "classification_string", ""),
        matrix_x=_amount(_get(result, "matrix_x")),
        matrix_y=_amount(_get(result, "matrix_y")),
        risk=_label(_get(result, "risk_classification", "")),
        opportunity=opportunity or None,
    )


def _financial(result: Any, symbol: str) -> Optional[DashboardFinancial]:
    if result is None:
        return None
    revenue = _amount(_get(result, "revenue_upside"))
    margin = _amount(_get(result, "profit_margin_expansion_value"))
    cost = _amount(_get(result, "cost_reduction"))
    total = revenue + margin + cost
    return DashboardFinancial(
        revenue_upside=revenue,
        profit_margin_expansion_value=margin,
        cost_reduction=cost,
        total_impact=total,
        revenue_upside_formatted=format_currency(float(revenue), symbol),
        margin_formatted=format_currency(float(margin), symbol),
        cost_reduction_formatted=format_currency(float(cost), symbol),
        total_formatted=format_currency(float(total), symbol),
    )


def _roi(result: Any, symbol: str) -> Optional[DashboardROI]:
    if result is None:
        return None
    investment = _amount(_get(result, "total_investment"))
    return DashboardROI(
        total_investment=investment,
        expected_roi_pct=_optional_amount(_get(result, "expected_roi_pct")),
        payback_period_years=_optional_amount(_get(result, "payback_period_years")),
        total_investment_formatted=format_currency(float(investment), symbol),
    )


def _risk(result: Any) -> Optional[DashboardRisk]:
    if result is None:
        return None
    scores = _get(result, "category_scores") or {}
    categories = {name: _amount(scores.get(name)) for name in RISK_CATEGORIES}
    return DashboardRisk(
        overall_risk_score=_amount(_get(result, "overall_risk_score")),
        risk_level=_label(_get(result, "risk_level", "")),
        **categories,
    )


def _roadmap(result: Any, symbol: str) -> Optional[DashboardRoadmap]:
    if result is None:
        return None
    phases = [
        DashboardPhase(
            name=_get(p, "name") or "Phase",
            estimated_cost=_amount(_get(p, "estimated_cost")),
            projected_impact_value=_amount(_get(p, "projected_impact_value")),
        )
        for p in _get(result, "phases") or []
    ]
    total_cost = _optional_amount(_get(result, "total_estimated_cost"))
    if total_cost is None:
        total_cost = sum_decimals(p.estimated_cost for p in phases)
    total_impact = _optional_amount(_get(result, "total_projected_impact"))
    if total_impact is None:
        total_impact = sum_decimals(p.projected_impact_value for p in phases)
    return DashboardRoadmap(
        phase_count=len(phases),
        total_estimated_cost=total_cost,
        total_projected_impact=total_impact,
        total_cost_formatted=format_currency(float(total_cost), symbol),
        total_impact_formatted=format_currency(float(total_impact), symbol),
        phases=phases,
    )


def prepare_dashboard_data(
    organisation_id: str,
    data_maturity: Any = None,
    ai_maturity: Any = None,
    classification: Any = None,
    financial: Any = None,
    roi: Any = None,
    risk: Any = None,
    roadmap: Any = None,
    previous_data_maturity: Optional[float] = None,
    previous_ai_maturity: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> ExecutiveDashboard:
    """
    Build the dashboard payload for one organisation.

    ``previous_*`` values are the prior period's scores; when given, the
    change since then is reported under ``trends``.
    """
    symbol = (settings or get_settings()).CURRENCY_SYMBOL
    maturity = _maturity(data_maturity, ai_maturity)

    trends = {}
    if data_maturity is not None and as_number(previous_data_maturity) is not None:
        trends["data_maturity_index_delta"] = to_decimal(
            as_number(_get(data_maturity, "maturity_index"), 0.0) - as_number(previous_data_maturity)
        )
    if ai_maturity is not None and as_number(previous_ai_maturity) is not None:
        trends["ai_maturity_score_delta"] = to_decimal(
            as_number(_get(ai_maturity, "maturity_score"), 0.0) - as_number(previous_ai_maturity)
        )

    dashboard = ExecutiveDashboard(
        organisation_id=organisation_id,
        maturity=maturity,
        classification=_classification(classification),
        financial=_financial(financial, symbol),
        roi=_roi(roi, symbol),
        risk=_risk(risk),
        roadmap=_roadmap(roadmap, symbol),
        trends=trends,
    )
    logger.info(
        "executive_dashboard_prepared",
        organisation_id=organisation_id,
        sections=[
            name for name in ("maturity", "classification", "financial", "roi", "risk", "roadmap")
            if getattr(dashboard, name) is not None
        ],
    )
    return dashboard
