"""Pydantic input models and enumerations for the scoring engine."""
