from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "analysis.yml"

DEFAULT_MAX_IMAGE_BYTES = 20 * 1024 * 1024


@dataclass(frozen=True)
class ProviderConfig:
    name: str = "openai"
    model: str = "gpt-4o"
    api_key_env: str = "OPENAI_API_KEY"
    api_url: Optional[str] = None
    temperature: float = 0.3
    max_tokens: int = 1000
    timeout_s: Optional[float] = None

    @property
    def api_key(self) -> str:
        return os.getenv(self.api_key_env, "")


@dataclass(frozen=True)
class DemoConfig:
    delay_ms: int = 2000
    fake_probability: float = 0.4
    confidence_min: int = 70
    confidence_max: int = 100


@dataclass(frozen=True)
class AnalysisConfig:
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES
    log_level: str = "INFO"

    @property
    def provider_configured(self) -> bool:
        return bool(self.provider.api_key)


def _optional_float(value) -> Optional[float]:
    return float(value) if value is not None else None


@lru_cache
def get_analysis_config(path: Path = CONFIG_PATH) -> AnalysisConfig:
    data = yaml.safe_load(path.read_text()) if path.exists() else {}
    data = data or {}
    provider_data = data.get("provider") or {}
    demo_data = data.get("demo") or {}
    provider = ProviderConfig(
        name=provider_data.get("name", "openai"),
        model=provider_data.get("model", "gpt-4o"),
        api_key_env=provider_data.get("api_key_env", "OPENAI_API_KEY"),
        api_url=provider_data.get("api_url"),
        temperature=float(provider_data.get("temperature", 0.3)),
        max_tokens=int(provider_data.get("max_tokens", 1000)),
        timeout_s=_optional_float(provider_data.get("timeout_s")),
    )
    demo = DemoConfig(
        delay_ms=int(demo_data.get("delay_ms", 2000)),
        fake_probability=float(demo_data.get("fake_probability", 0.4)),
        confidence_min=int(demo_data.get("confidence_min", 70)),
        confidence_max=int(demo_data.get("confidence_max", 100)),
    )
    return AnalysisConfig(
        provider=provider,
        demo=demo,
        max_image_bytes=int(data.get("max_image_bytes", DEFAULT_MAX_IMAGE_BYTES)),
        log_level=str(data.get("log_level", "INFO")).upper(),
    )
