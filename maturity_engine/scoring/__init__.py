"""
scoring/ - Maturity & Decision-Support Scoring Engine

Modules:
    utils.py                  - Clamping, Decimal rounding, statistics helpers
    rubric.py                 - Sub-item normalisation and category scoring
    data_maturity.py          - Data Maturity Calculator (6 stages)
    ai_maturity.py            - AI Maturity Calculator (7 stages)
    classification.py         - First-match Maturity Classification Engine
    distribution.py           - Distribution Statistics (R-7 quartiles, IQR outliers)
    capability_gaps.py        - Capability Gap Engine
    industry_benchmark.py     - Industry benchmarks and comparison
    financial_impact.py       - Financial Impact Calculator
    financial_model.py        - Financial Model Orchestrator (revenue/cost/profit)
    risk_assessment.py        - Risk Assessment Calculator and Risk Scoring Service
    risk_model.py             - Failure probability and expected loss
    roi_investment.py         - ROI & Investment Calculator
    competitive_position.py   - Competitive Position Analyzer
    roadmap.py                - Transformation Roadmap Generator
    investment_simulation.py  - Investment Simulation
    strategic_simulation.py   - Strategic Decision Simulator
    valuation.py              - Valuation Adjustment Calculator
    alignment.py              - Data/AI alignment score
    maturity_progress.py      - Maturity progress, goals and anomalies
    assessment_service.py     - Full assessment pipeline
    digital_twin.py           - Enterprise digital twin (state, simulation, path optimisation)
    acquisition_scanner.py    - Acquisition opportunity scanner
    portfolio_intelligence.py - Portfolio metrics and performer rankings
    executive_dashboard.py    - Executive dashboard payload
"""
