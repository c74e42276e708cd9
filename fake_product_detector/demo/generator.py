from __future__ import annotations

import random
from typing import Optional

from fake_product_detector.analysis.config import DemoConfig
from fake_product_detector.analysis.schemas import (
    FAKE_PRODUCT,
    REAL_PRODUCT,
    AnalysisDetails,
    AnalysisResult,
)

FAKE_REASONING = (
    "The image shows several indicators commonly associated with counterfeit "
    "products, including inconsistent logo placement, lower material quality, "
    "and manufacturing irregularities."
)
REAL_REASONING = (
    "The product appears to exhibit characteristics consistent with authentic "
    "merchandise, including proper branding, quality materials, and professional "
    "manufacturing standards."
)
FAKE_VISUAL_CUES = [
    "Inconsistent logo quality",
    "Poor material finish",
    "Irregular stitching patterns",
]
REAL_VISUAL_CUES = [
    "High-quality materials",
    "Consistent branding",
    "Professional manufacturing",
]
FAKE_RISK_FACTORS = [
    "Logo placement inconsistencies",
    "Material quality concerns",
    "Manufacturing irregularities",
]


def generate_demo_result(
    config: Optional[DemoConfig] = None, rng: Optional[random.Random] = None
) -> AnalysisResult:
    """Build a randomized result; the uploaded image is never looked at."""
    config = config or DemoConfig()
    rng = rng or random.Random()
    is_fake = rng.random() < config.fake_probability
    confidence = rng.randint(config.confidence_min, config.confidence_max)
    if is_fake:
        return AnalysisResult(
            prediction=FAKE_PRODUCT,
            confidence=confidence,
            reasoning=FAKE_REASONING,
            details=AnalysisDetails(
                visual_cues=list(FAKE_VISUAL_CUES),
                risk_factors=list(FAKE_RISK_FACTORS),
                authenticity_score=100 - confidence,
            ),
        )
    return AnalysisResult(
        prediction=REAL_PRODUCT,
        confidence=confidence,
        reasoning=REAL_REASONING,
        details=AnalysisDetails(
            visual_cues=list(REAL_VISUAL_CUES),
            risk_factors=[],
            authenticity_score=confidence,
        ),
    )
