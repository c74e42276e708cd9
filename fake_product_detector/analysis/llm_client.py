from __future__ import annotations

import base64
import logging
import os
import time
from typing import Any, Dict, Optional
from uuid import uuid4

import httpx

from fake_product_detector.analysis.errors import ProviderError

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = """You are an expert product authenticity detector. Analyze this product image and determine if it appears to be a genuine/authentic product or a fake/counterfeit product.

Please provide your analysis in the following JSON format:
{
  "prediction": "Real Product" or "Fake Product",
  "confidence": number between 0-100,
  "reasoning": "detailed explanation of your assessment",
  "details": {
    "visualCues": ["list of visual indicators you observed"],
    "riskFactors": ["list of concerning elements if any"],
    "authenticity_score": number between 0-100
  }
}

Look for indicators such as:
- Build quality and materials
- Logo placement and quality
- Text clarity and font consistency
- Overall craftsmanship
- Packaging quality (if visible)
- Price-to-quality ratio indicators
- Common counterfeit telltale signs

Be thorough but concise in your analysis."""


def build_data_uri(image_bytes: bytes, mime_type: Optional[str]) -> str:
    subtype = ""
    if mime_type and "/" in mime_type:
        subtype = mime_type.split("/", 1)[1].strip()
    subtype = subtype or "jpeg"
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:image/{subtype};base64,{encoded}"


class VisionLLMClient:
    def __init__(
        self,
        provider: str,
        model: str,
        api_key: str,
        api_url: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = 1000,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.provider = provider
        self.model = model
        self.api_key = api_key
        api_url = self._resolve_api_url(provider, api_url)
        if not api_url:
            raise ValueError("LLM API URL is required")
        self.api_url: str = api_url
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_s = timeout_s
        self.last_latency_ms: Optional[float] = None
        self.last_request_id: Optional[str] = None

    @staticmethod
    def _resolve_api_url(provider: str, api_url: Optional[str]) -> Optional[str]:
        env_url = os.getenv("LLM_API_URL")
        if env_url:
            return env_url
        if api_url:
            return api_url
        if provider == "openai":
            return "https://api.openai.com/v1/chat/completions"
        return None

    @staticmethod
    def _extract_content(data: Dict[str, Any]) -> Optional[str]:
        if isinstance(data.get("content"), str):
            return data["content"]
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            first = choices[0]
            if isinstance(first, dict):
                message = first.get("message")
                if isinstance(message, dict) and isinstance(
                    message.get("content"), str
                ):
                    return message["content"]
                if isinstance(first.get("text"), str):
                    return first["text"]
        return None

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        # OpenAI-style bodies carry {"error": {"message": ...}}
        try:
            body = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                return error["message"]
            if isinstance(error, str):
                return error
        return response.text[:200]

    def build_payload(self, image_bytes: bytes, mime_type: Optional[str]) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": ANALYSIS_PROMPT},
                        {
                            "type": "image_url",
                            "image_url": {"url": build_data_uri(image_bytes, mime_type)},
                        },
                    ],
                }
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    def analyze_image(self, image_bytes: bytes, mime_type: Optional[str]) -> str:
        request_id = str(uuid4())
        self.last_request_id = request_id
        return self._send_request(self.build_payload(image_bytes, mime_type), request_id)

    def _send_request(self, payload: Dict[str, Any], request_id: str) -> str:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        start_time = time.monotonic()
        try:
            with httpx.Client(timeout=self.timeout_s) as client:
                response = client.post(self.api_url, headers=headers, json=payload)
                if response.is_error:
                    raise ProviderError(
                        f"LLM request failed with status {response.status_code}: "
                        f"{self._error_detail(response)}"
                    )
                data = response.json()
        except httpx.HTTPError as exc:
            raise ProviderError(
                f"LLM request failed for provider={self.provider} "
                f"request_id={request_id}: {exc}"
            ) from exc
        except ValueError as exc:
            raise ProviderError(
                f"Invalid JSON response from provider={self.provider} "
                f"request_id={request_id}"
            ) from exc
        finally:
            self.last_latency_ms = (time.monotonic() - start_time) * 1000
            logger.debug(
                "LLM request completed request_id=%s provider=%s latency_ms=%.2f",
                request_id,
                self.provider,
                self.last_latency_ms,
            )
        content = self._extract_content(data) if isinstance(data, dict) else None
        if not content:
            raise ProviderError("No analysis received from AI")
        return content
