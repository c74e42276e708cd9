from fake_product_detector.analysis.config import (
    AnalysisConfig,
    ProviderConfig,
    get_analysis_config,
)


def test_packaged_config_matches_documented_defaults():
    config = get_analysis_config()

    assert config.provider.model == "gpt-4o"
    assert config.provider.api_key_env == "OPENAI_API_KEY"
    assert config.provider.temperature == 0.3
    assert config.provider.max_tokens == 1000
    assert config.provider.timeout_s is None
    assert config.max_image_bytes == 20 * 1024 * 1024
    assert config.demo.delay_ms == 2000
    assert config.demo.fake_probability == 0.4
    assert (config.demo.confidence_min, config.demo.confidence_max) == (70, 100)


def test_config_overrides_from_yaml(tmp_path):
    path = tmp_path / "analysis.yml"
    path.write_text(
        "provider:\n"
        "  model: gpt-4o-mini\n"
        "  api_key_env: VISION_KEY\n"
        "  timeout_s: 30\n"
        "demo:\n"
        "  delay_ms: 0\n"
        "log_level: debug\n"
    )

    config = get_analysis_config(path)

    assert config.provider.model == "gpt-4o-mini"
    assert config.provider.api_key_env == "VISION_KEY"
    assert config.provider.timeout_s == 30.0
    assert config.provider.max_tokens == 1000
    assert config.demo.delay_ms == 0
    assert config.demo.fake_probability == 0.4
    assert config.log_level == "DEBUG"


def test_missing_config_file_falls_back_to_defaults(tmp_path):
    config = get_analysis_config(tmp_path / "absent.yml")

    assert config == AnalysisConfig()


def test_credential_is_read_at_call_time(monkeypatch):
    config = AnalysisConfig(provider=ProviderConfig(api_key_env="VISION_KEY"))

    monkeypatch.delenv("VISION_KEY", raising=False)
    assert config.provider_configured is False

    monkeypatch.setenv("VISION_KEY", "sk-test")
    assert config.provider_configured is True
    assert config.provider.api_key == "sk-test"
