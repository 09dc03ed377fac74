"""Pregnancy and cycle care calculations for HerJourney.

This subpackage holds the pure calculators behind the dashboard and the
daily health analyzer.  Nothing here touches persisted state.

Modules:
    gestation      - Gestational age, trimester and cycle estimates
    analyzer       - Rules-based daily risk scorer and weekly trends
    tips           - Weekly tips and size comparisons
    symptoms       - Symptom catalogues for the daily tracker
    config_loader  - care_config.yaml loading and validation
"""

from herjourney.care.analyzer import (
    AnalyzerEntry,
    AnalyzerResult,
    HealthRiskScorer,
    RiskLevel,
    RiskTrend,
    TrendSummary,
)
from herjourney.care.gestation import CycleResult, GestationCalculator, PregnancyResult

__all__ = [
    "AnalyzerEntry",
    "AnalyzerResult",
    "HealthRiskScorer",
    "RiskLevel",
    "RiskTrend",
    "TrendSummary",
    "CycleResult",
    "GestationCalculator",
    "PregnancyResult",
]
