from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from fake_product_detector.analysis.schemas import AnalysisReport, AnalysisResult


@dataclass(frozen=True)
class DownloadedReport:
    filename: str
    content: str
    report: AnalysisReport


def _iso_timestamp(moment: datetime) -> str:
    # Browsers emit millisecond precision with a trailing Z
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def report_filename(moment: datetime) -> str:
    return f"product-analysis-{int(moment.timestamp() * 1000)}.json"


def build_report(
    result: AnalysisResult, filename: str, now: Optional[datetime] = None
) -> DownloadedReport:
    moment = now or datetime.now(timezone.utc)
    report = AnalysisReport(
        timestamp=_iso_timestamp(moment),
        filename=filename,
        prediction=result.prediction,
        confidence=result.confidence,
        reasoning=result.reasoning,
        details=result.details,
    )
    content = json.dumps(report.model_dump(by_alias=True), indent=2)
    return DownloadedReport(
        filename=report_filename(moment), content=content, report=report
    )
