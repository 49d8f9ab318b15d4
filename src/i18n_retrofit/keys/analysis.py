"""
Candidate analysis for i18n-retrofit.

Turns scanned candidates into keyed suggestions (key, value with
placeholders, confidence, risk) ready for review.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from ..scanning.types import Candidate
from .key_generator import KeyGenerator

logger = logging.getLogger(__name__)

SAFE_THRESHOLD = 80
WARNING_THRESHOLD = 50


class RiskLevel(Enum):
    """How risky it is to apply a suggestion without a closer look."""

    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"


def assess_risk(confidence: int) -> RiskLevel:
    if confidence >= SAFE_THRESHOLD:
        return RiskLevel.SAFE
    if confidence >= WARNING_THRESHOLD:
        return RiskLevel.WARNING
    return RiskLevel.DANGER


@dataclass(frozen=True)
class KeyedCandidate:
    """A candidate enriched with its suggested key, value and score."""

    candidate: Candidate
    key: str
    value: str
    confidence: int
    params: tuple[str, ...]
    risk: RiskLevel

    def to_review_payload(self, base_path: str | None = None) -> dict[str, object]:
        """
        Build the record sent to an external review service.

        Args:
            base_path: When given, file paths under it are made relative

        Returns:
            Mapping with file, line, text, key, value, confidence, element_type,
            file_type and context
        """
        candidate = self.candidate
        return {
            "file": candidate.relative_path(base_path) if base_path else candidate.file,
            "line": candidate.line,
            "text": candidate.text,
            "key": self.key,
            "value": self.value,
            "confidence": self.confidence,
            "element_type": candidate.element_type,
            "file_type": candidate.file_type.value,
            "context": candidate.context,
        }

    def to_dict(self, base_path: str | None = None) -> dict[str, object]:
        """Review payload plus the detected params and the risk level."""
        payload = self.to_review_payload(base_path)
        payload["params"] = list(self.params)
        payload["risk"] = self.risk.value
        return payload


def analyze_candidate(candidate: Candidate, generator: KeyGenerator | None = None) -> KeyedCandidate:
    generator = generator or KeyGenerator()

    key = generator.generate(candidate)
    confidence = generator.calculate_confidence(candidate, key)
    params = generator.detect_parameters(candidate.text)
    value = generator.apply_parameters(candidate.text, params) if params else candidate.text

    return KeyedCandidate(
        candidate=candidate,
        key=key,
        value=value,
        confidence=confidence,
        params=tuple(params),
        risk=assess_risk(confidence),
    )


def analyze_candidates(
    candidates: Iterable[Candidate],
    min_confidence: int = 0,
    generator: KeyGenerator | None = None,
) -> list[KeyedCandidate]:
    """
    Key and score candidates.

    Args:
        candidates: Candidates from a scan
        min_confidence: Suggestions scoring below this are dropped
        generator: Key generator to use (a default one when None)

    Returns:
        Suggestions sorted by confidence, highest first; ties keep scan order
    """
    generator = generator or KeyGenerator()
    analyzed = [analyze_candidate(candidate, generator) for candidate in candidates]
    kept = [item for item in analyzed if item.confidence >= min_confidence]

    if len(kept) < len(analyzed):
        logger.debug(
            f"Dropped {len(analyzed) - len(kept)} suggestions below confidence {min_confidence}"
        )

    return sorted(kept, key=lambda item: item.confidence, reverse=True)


def risk_summary(analyzed: Iterable[KeyedCandidate]) -> dict[str, int]:
    """Count suggestions per risk level."""
    summary = {level.value: 0 for level in RiskLevel}
    for item in analyzed:
        summary[item.risk.value] += 1
    return summary
