"""Turn free-form provider text into an :class:`AnalysisResult`.

The provider is asked for JSON but may wrap it in prose or ignore the request
entirely. ``extract_embedded_json`` recovers an embedded object when there is
one, ``classify_by_keyword`` builds a candidate from the raw text when there is
not, and ``normalize_result`` validates and defaults every field of either
candidate.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from fake_product_detector.analysis.schemas import (
    FAKE_PRODUCT,
    REAL_PRODUCT,
    AnalysisDetails,
    AnalysisResult,
)

logger = logging.getLogger(__name__)

JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
FAKE_KEYWORDS = ("fake", "counterfeit", "replica")

FALLBACK_CONFIDENCE = 75
FALLBACK_VISUAL_CUE = "AI analysis completed - detailed JSON parsing unavailable"
FALLBACK_RISK_FACTOR = "Potential authenticity concerns detected"

DEFAULT_CONFIDENCE = 50
DEFAULT_REASONING = "Analysis completed successfully"
DEFAULT_VISUAL_CUE = "Visual analysis performed"


def extract_embedded_json(text: str) -> Optional[Dict[str, Any]]:
    match = JSON_OBJECT_PATTERN.search(text or "")
    if not match:
        logger.debug("No JSON object found in provider response")
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.debug("Embedded JSON in provider response could not be parsed")
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def classify_by_keyword(text: str) -> Dict[str, Any]:
    lowered = (text or "").lower()
    is_fake = any(keyword in lowered for keyword in FAKE_KEYWORDS)
    return {
        "prediction": FAKE_PRODUCT if is_fake else REAL_PRODUCT,
        "confidence": FALLBACK_CONFIDENCE,
        "reasoning": text,
        "details": {
            "visualCues": [FALLBACK_VISUAL_CUE],
            "riskFactors": [FALLBACK_RISK_FACTOR] if is_fake else [],
            "authenticity_score": 25 if is_fake else 75,
        },
    }


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return min(high, max(low, value))


def _coerce_score(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    else:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return _clamp(int(round(number)))


def _string_list(value: Any, default: List[str]) -> List[str]:
    if not isinstance(value, list):
        return list(default)
    return [item if isinstance(item, str) else json.dumps(item) for item in value]


def normalize_result(candidate: Dict[str, Any]) -> AnalysisResult:
    details = candidate.get("details")
    if not isinstance(details, dict):
        details = {}

    confidence = _coerce_score(candidate.get("confidence"))
    if confidence is None:
        confidence = DEFAULT_CONFIDENCE
    authenticity_score = _coerce_score(details.get("authenticity_score"))
    if authenticity_score is None:
        authenticity_score = confidence

    reasoning = candidate.get("reasoning")
    if not isinstance(reasoning, str) or not reasoning:
        reasoning = DEFAULT_REASONING

    return AnalysisResult(
        prediction=FAKE_PRODUCT
        if candidate.get("prediction") == FAKE_PRODUCT
        else REAL_PRODUCT,
        confidence=confidence,
        reasoning=reasoning,
        details=AnalysisDetails(
            visual_cues=_string_list(details.get("visualCues"), [DEFAULT_VISUAL_CUE]),
            risk_factors=_string_list(details.get("riskFactors"), []),
            authenticity_score=authenticity_score,
        ),
    )


def parse_provider_text(text: str) -> AnalysisResult:
    candidate = extract_embedded_json(text)
    if candidate is None:
        logger.warning("Provider response was not valid JSON, using keyword fallback")
        candidate = classify_by_keyword(text)
    return normalize_result(candidate)
