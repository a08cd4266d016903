"""
Maturity Decision Engine

Pure, deterministic scoring and decision-support calculators:
data/AI maturity, classification, distribution statistics, capability gaps,
financial impact, risk, ROI, competitive position, roadmaps, valuation and
multi-year simulations.
"""

__version__ = "1.0.0"
