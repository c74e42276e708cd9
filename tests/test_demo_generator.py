import random

from fake_product_detector.analysis.config import DemoConfig
from fake_product_detector.demo.generator import (
    FAKE_RISK_FACTORS,
    REAL_VISUAL_CUES,
    generate_demo_result,
)


def test_generated_results_respect_score_rules():
    rng = random.Random(7)

    for _ in range(500):
        result = generate_demo_result(DemoConfig(), rng)
        assert 70 <= result.confidence <= 100
        if result.is_fake:
            assert result.details.authenticity_score == 100 - result.confidence
            assert result.details.risk_factors == FAKE_RISK_FACTORS
        else:
            assert result.details.authenticity_score == result.confidence
            assert result.details.risk_factors == []
            assert result.details.visual_cues == REAL_VISUAL_CUES


def test_fake_share_tracks_configured_probability():
    rng = random.Random(1234)

    fakes = sum(generate_demo_result(DemoConfig(), rng).is_fake for _ in range(2000))

    assert 700 < fakes < 900


def test_probability_extremes_pin_the_branch():
    always_fake = DemoConfig(fake_probability=1.0)
    never_fake = DemoConfig(fake_probability=0.0)

    assert generate_demo_result(always_fake).prediction == "Fake Product"
    assert generate_demo_result(never_fake).prediction == "Real Product"


def test_templates_are_copied_per_result():
    result = generate_demo_result(DemoConfig(fake_probability=1.0))
    result.details.risk_factors.append("mutated")

    assert "mutated" not in FAKE_RISK_FACTORS
