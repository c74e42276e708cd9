import pytest

from fake_product_detector.analysis.parsing import (
    classify_by_keyword,
    extract_embedded_json,
    normalize_result,
    parse_provider_text,
)


def test_extract_embedded_json_ignores_surrounding_prose():
    text = 'Here is my analysis:\n{"prediction": "Fake Product", "confidence": 88}\nThanks!'

    assert extract_embedded_json(text) == {"prediction": "Fake Product", "confidence": 88}


def test_extract_embedded_json_handles_markdown_fence():
    text = '```json\n{"prediction": "Real Product", "details": {"visualCues": []}}\n```'

    assert extract_embedded_json(text)["details"] == {"visualCues": []}


def test_extract_embedded_json_returns_none_without_object():
    assert extract_embedded_json("I think this is fake based on poor stitching.") is None


def test_extract_embedded_json_returns_none_for_broken_json():
    assert extract_embedded_json('{"prediction": "Fake Product", confidence: }') is None


def test_extract_embedded_json_spans_first_to_last_brace():
    # Two separate objects make the greedy span invalid JSON.
    assert extract_embedded_json('{"a": 1} and also {"b": 2}') is None


@pytest.mark.parametrize(
    "text",
    [
        "This looks like a FAKE handbag.",
        "Probably counterfeit, the logo is off.",
        "A decent Replica at best.",
    ],
)
def test_classify_by_keyword_detects_fake_keywords(text):
    candidate = classify_by_keyword(text)

    assert candidate["prediction"] == "Fake Product"
    assert candidate["confidence"] == 75
    assert candidate["reasoning"] == text
    assert candidate["details"]["riskFactors"] == [
        "Potential authenticity concerns detected"
    ]
    assert candidate["details"]["authenticity_score"] == 25


def test_classify_by_keyword_defaults_to_real():
    candidate = classify_by_keyword("Stitching and logo look consistent with the brand.")

    assert candidate["prediction"] == "Real Product"
    assert candidate["details"]["riskFactors"] == []
    assert candidate["details"]["authenticity_score"] == 75
    assert candidate["details"]["visualCues"] == [
        "AI analysis completed - detailed JSON parsing unavailable"
    ]


def test_normalize_result_keeps_well_formed_values():
    result = normalize_result(
        {
            "prediction": "Fake Product",
            "confidence": 91,
            "reasoning": "Blurry logo print.",
            "details": {
                "visualCues": ["blurry logo", "uneven seams"],
                "riskFactors": ["logo"],
                "authenticity_score": 12,
            },
        }
    )

    assert result.prediction == "Fake Product"
    assert result.confidence == 91
    assert result.reasoning == "Blurry logo print."
    assert result.details.visual_cues == ["blurry logo", "uneven seams"]
    assert result.details.risk_factors == ["logo"]
    assert result.details.authenticity_score == 12


def test_normalize_result_applies_defaults():
    result = normalize_result({})

    assert result.prediction == "Real Product"
    assert result.confidence == 50
    assert result.reasoning == "Analysis completed successfully"
    assert result.details.visual_cues == ["Visual analysis performed"]
    assert result.details.risk_factors == []
    assert result.details.authenticity_score == 50


@pytest.mark.parametrize(
    "raw, expected",
    [(150, 100), (-20, 0), (87.6, 88), ("64", 64), ("82%", 82), ("high", 50), (True, 50)],
)
def test_normalize_result_coerces_and_clamps_confidence(raw, expected):
    assert normalize_result({"confidence": raw}).confidence == expected


def test_normalize_result_only_accepts_exact_fake_label():
    assert normalize_result({"prediction": "fake product"}).prediction == "Real Product"
    assert normalize_result({"prediction": "Fake"}).prediction == "Real Product"


def test_normalize_result_authenticity_score_follows_confidence_when_absent():
    result = normalize_result({"confidence": 83, "details": {"visualCues": "not a list"}})

    assert result.details.authenticity_score == 83
    assert result.details.visual_cues == ["Visual analysis performed"]


def test_normalize_result_serializes_with_wire_field_names():
    body = normalize_result({"details": {"riskFactors": ["a"]}}).model_dump(by_alias=True)

    assert set(body) == {"prediction", "confidence", "reasoning", "details"}
    assert set(body["details"]) == {"visualCues", "riskFactors", "authenticity_score"}


def test_parse_provider_text_falls_back_for_plain_text():
    result = parse_provider_text("I think this is fake based on poor stitching.")

    assert result.prediction == "Fake Product"
    assert result.confidence == 75
    assert result.details.authenticity_score == 25
    assert result.details.risk_factors


def test_parse_provider_text_uses_embedded_json():
    result = parse_provider_text(
        'Sure. {"prediction": "Real Product", "confidence": 97, "reasoning": "ok"}'
    )

    assert result.prediction == "Real Product"
    assert result.confidence == 97
    assert result.details.authenticity_score == 97
