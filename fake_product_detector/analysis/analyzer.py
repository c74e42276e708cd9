from __future__ import annotations

import logging
from typing import Optional, Protocol

from fake_product_detector.analysis.config import AnalysisConfig, get_analysis_config
from fake_product_detector.analysis.errors import (
    ImageTooLarge,
    MissingImage,
    ProviderError,
    ProviderNotConfigured,
)
from fake_product_detector.analysis.llm_client import VisionLLMClient
from fake_product_detector.analysis.parsing import parse_provider_text
from fake_product_detector.analysis.schemas import AnalysisResult

logger = logging.getLogger(__name__)


class ImageAnalyzer(Protocol):
    def analyze_image(self, image_bytes: bytes, mime_type: Optional[str]) -> str:
        ...


def build_vision_client(config: AnalysisConfig) -> VisionLLMClient:
    provider = config.provider
    return VisionLLMClient(
        provider=provider.name,
        model=provider.model,
        api_key=provider.api_key,
        api_url=provider.api_url,
        temperature=provider.temperature,
        max_tokens=provider.max_tokens,
        timeout_s=provider.timeout_s,
    )


def check_image(image_bytes: Optional[bytes], config: AnalysisConfig) -> bytes:
    if image_bytes is None:
        raise MissingImage()
    if len(image_bytes) > config.max_image_bytes:
        raise ImageTooLarge(config.max_image_bytes)
    return image_bytes


def analyze_product_image(
    image_bytes: bytes,
    mime_type: Optional[str],
    config: Optional[AnalysisConfig] = None,
    llm_client: Optional[ImageAnalyzer] = None,
) -> AnalysisResult:
    config = config or get_analysis_config()
    check_image(image_bytes, config)
    if llm_client is None:
        if not config.provider_configured:
            logger.warning(
                "Provider credential missing env=%s", config.provider.api_key_env
            )
            raise ProviderNotConfigured(config.provider.api_key_env)
        llm_client = build_vision_client(config)

    analysis_text = llm_client.analyze_image(image_bytes, mime_type)
    if not analysis_text:
        raise ProviderError("No analysis received from AI")
    logger.debug("Analysis text: %s...", analysis_text[:200])

    result = parse_provider_text(analysis_text)
    logger.info(
        "Returning result: %s with %s%% confidence",
        result.prediction,
        result.confidence,
    )
    return result
