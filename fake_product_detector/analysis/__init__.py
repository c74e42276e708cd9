"""Provider-backed product authenticity analysis."""

from fake_product_detector.analysis.analyzer import analyze_product_image
from fake_product_detector.analysis.config import AnalysisConfig, get_analysis_config
from fake_product_detector.analysis.schemas import AnalysisResult

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "analyze_product_image",
    "get_analysis_config",
]
