"""
Translation key generation and candidate analysis for i18n-retrofit.
"""

from .analysis import (
    KeyedCandidate,
    RiskLevel,
    analyze_candidate,
    analyze_candidates,
    assess_risk,
    risk_summary,
)
from .key_generator import (
    KeyGenerator,
    apply_parameters,
    calculate_confidence,
    detect_parameters,
    generate_key,
)

__all__ = [
    "KeyedCandidate",
    "RiskLevel",
    "analyze_candidate",
    "analyze_candidates",
    "assess_risk",
    "risk_summary",
    "KeyGenerator",
    "apply_parameters",
    "calculate_confidence",
    "detect_parameters",
    "generate_key",
]
