"""Client-side upload session.

``UploadSession`` holds the same state the browser page keeps for one tab and
exposes its transitions as methods, so the upload, analysis and report flow can
be driven from Python (the CLI, tests) against a running API.
"""

from __future__ import annotations

import base64
import logging
import mimetypes
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

import httpx

from fake_product_detector.analysis.schemas import AnalysisResult
from fake_product_detector.ui.report import DownloadedReport, build_report

logger = logging.getLogger(__name__)

LIVE_ENDPOINT = "/api/analyze"
DEMO_ENDPOINT = "/api/demo-analyze"
GENERIC_ERROR = "Failed to analyze image. Please try again."
UNKNOWN_ERROR = "Unknown error occurred"


@dataclass(frozen=True)
class SelectedImage:
    filename: str
    content_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path) -> "SelectedImage":
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content_type=content_type or "application/octet-stream",
            data=path.read_bytes(),
        )

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


@dataclass
class UploadSession:
    client: httpx.Client
    selected_image: Optional[SelectedImage] = None
    preview: Optional[str] = None
    analyzing: bool = False
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    drag_active: bool = False
    demo_mode: bool = False

    def select_image(self, image: SelectedImage) -> bool:
        if not image.is_image:
            return False
        self.selected_image = image
        self.preview = image.to_data_uri()
        self.result = None
        self.error = None
        return True

    def drag_enter(self) -> None:
        self.drag_active = True

    def drag_over(self) -> None:
        self.drag_active = True

    def drag_leave(self) -> None:
        self.drag_active = False

    def drop(self, files: Sequence[SelectedImage]) -> None:
        self.drag_active = False
        if files:
            self.select_image(files[0])

    @property
    def endpoint(self) -> str:
        return DEMO_ENDPOINT if self.demo_mode else LIVE_ENDPOINT

    def analyze(self) -> Optional[AnalysisResult]:
        if self.selected_image is None or self.analyzing:
            return None
        self.analyzing = True
        self.error = None
        image = self.selected_image
        try:
            logger.debug("Using endpoint: %s", self.endpoint)
            response = self.client.post(
                self.endpoint,
                files={"image": (image.filename, image.data, image.content_type)},
            )
            logger.debug("Response status: %s", response.status_code)
            if response.is_error:
                self.error = _error_message(response)
                return None
            self.result = AnalysisResult.model_validate(response.json())
            self.error = None
            return self.result
        except httpx.HTTPError as exc:
            logger.error("Analysis error: %s", exc)
            self.error = str(exc) or GENERIC_ERROR
            return None
        except ValueError as exc:
            logger.error("Analysis error: %s", exc)
            self.error = GENERIC_ERROR
            return None
        finally:
            self.analyzing = False

    def remove(self) -> None:
        self.selected_image = None
        self.preview = None
        self.result = None

    def download_report(self, now: Optional[datetime] = None) -> Optional[DownloadedReport]:
        if self.result is None or self.selected_image is None:
            return None
        return build_report(self.result, self.selected_image.filename, now=now)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return UNKNOWN_ERROR
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return f"HTTP {response.status_code}: {response.reason_phrase}"
