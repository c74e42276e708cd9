import pytest
from fastapi.testclient import TestClient

from fake_product_detector.api.main import app


@pytest.mark.contract
def test_openapi_contract_contains_expected_paths():
    schema = app.openapi()

    assert schema["info"]["title"] == "Fake Product Detector API"

    paths = schema["paths"]
    expected_paths = {
        "/health": {"get"},
        "/api/analyze": {"post"},
        "/api/demo-analyze": {"post"},
    }

    for path, methods in expected_paths.items():
        assert path in paths
        for method in methods:
            assert method in paths[path]
            assert "200" in paths[path][method]["responses"]

    analyze_responses = paths["/api/analyze"]["post"]["responses"]
    assert {"400", "401", "429", "500"} <= set(analyze_responses)


@pytest.mark.contract
def test_openapi_result_schema_keeps_wire_field_names():
    schemas = app.openapi()["components"]["schemas"]

    assert set(schemas["AnalysisResult"]["properties"]) == {
        "prediction",
        "confidence",
        "reasoning",
        "details",
    }
    assert set(schemas["AnalysisDetails"]["properties"]) == {
        "visualCues",
        "riskFactors",
        "authenticity_score",
    }


@pytest.mark.contract
def test_health_contract_response_shape():
    client = TestClient(app)

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_detector_page_is_served():
    client = TestClient(app)

    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    html = response.text
    assert "Fake Product Detector" in html
    assert '"/api/demo-analyze"' in html
    assert 'accept="image/*"' in html
    assert "max 20MB" in html
    assert "__" not in html.split("<script>")[0]
