from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

REAL_PRODUCT = "Real Product"
FAKE_PRODUCT = "Fake Product"

Prediction = Literal["Real Product", "Fake Product"]


class AnalysisDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    visual_cues: List[str] = Field(default_factory=list, alias="visualCues")
    risk_factors: List[str] = Field(default_factory=list, alias="riskFactors")
    authenticity_score: int = Field(ge=0, le=100)


class AnalysisResult(BaseModel):
    prediction: Prediction
    confidence: int = Field(ge=0, le=100)
    reasoning: str
    details: AnalysisDetails

    @property
    def is_fake(self) -> bool:
        return self.prediction == FAKE_PRODUCT


class AnalysisReport(BaseModel):
    timestamp: str
    filename: str
    prediction: Prediction
    confidence: int = Field(ge=0, le=100)
    reasoning: str
    details: AnalysisDetails


class ErrorBody(BaseModel):
    error: str
