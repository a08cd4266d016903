"""
Risk Input Models
maturity_engine/models/risk.py

Every field is optional; the calculators substitute the documented neutral
default for anything the caller leaves out.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from maturity_engine.models.enumerations import ProjectComplexity


class _RiskInput(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class AIMisalignmentInputs(_RiskInput):
    ai_maturity_score: Optional[float] = None            # default 50
    strategic_goals_alignment: Optional[str] = None      # low | medium | high
    ai_projects_governance: Optional[str] = None         # ad_hoc | defined | governed
    ai_ethics_framework: bool = False


class InfrastructureInputs(_RiskInput):
    cloud_vs_on_prem: Optional[str] = None               # cloud | hybrid | on_premise
    integration_complexity: Optional[str] = None         # low | medium | high
    cybersecurity_rating: Optional[float] = None         # 1-5, default 3
    backup_recovery: Optional[str] = None                # none | basic | tested


class OperationalInputs(_RiskInput):
    data_governance: Optional[str] = None                # none | basic | mature
    data_quality_controls: bool = False
    team_skills_rating: Optional[float] = None           # 1-5, default 3
    incident_response: Optional[str] = None              # none | reactive | proactive
    documentation_rating: Optional[float] = None         # 1-5, default 3


class StrategicInputs(_RiskInput):
    industry_benchmark_gap: Optional[float] = None       # 0-100, default 30
    regulatory_compliance: Optional[str] = None          # at_risk | compliant | leading
    competitive_data_ai_posture: Optional[str] = None    # behind | par | ahead
    data_ai_maturity_combined: Optional[float] = None    # 0-100, default 50


class RiskAssessmentInputs(_RiskInput):
    ai_misalignment: AIMisalignmentInputs = Field(default_factory=AIMisalignmentInputs)
    infrastructure: InfrastructureInputs = Field(default_factory=InfrastructureInputs)
    operational: OperationalInputs = Field(default_factory=OperationalInputs)
    strategic: StrategicInputs = Field(default_factory=StrategicInputs)


class ProjectRiskInputs(_RiskInput):
    """Initiative-level inputs for probability of failure."""
    complexity: ProjectComplexity = ProjectComplexity.MEDIUM
    team_experience_years: Optional[float] = None        # 0-30, default 5
    infrastructure_stability: Optional[float] = None     # 1-5, default 3
    historical_failure_rate: Optional[float] = None      # 0-1, default 0.2
    scope_uncertainty: Optional[float] = None            # 0-1, default 0.3


class LossInputs(_RiskInput):
    """Cost exposure if the initiative fails."""
    direct_cost: float = 0.0
    indirect_cost: float = 0.0
    reputational_cost: float = 0.0
    mitigation_spend: float = 0.0


class RiskModelInputs(_RiskInput):
    project: ProjectRiskInputs = Field(default_factory=ProjectRiskInputs)
    losses: LossInputs = Field(default_factory=LossInputs)
