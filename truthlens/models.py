from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional, Union

ApiSource = Literal["real", "mock", "mock-fallback"]


def utc_timestamp() -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix, as browsers emit it."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ContentKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class ExplanationItem(BaseModel):
    title: str
    status: str
    description: str
    confidence: int = Field(ge=0, le=100)


class SourceRef(BaseModel):
    name: str
    credibility: Literal["High", "Medium", "Low"]
    url: str


class FactCheckSummary(BaseModel):
    status: str
    summary: str
    details: List[str] = []


class ReportBody(BaseModel):
    """Score plus the explanation structures derived from it."""

    model_config = ConfigDict(populate_by_name=True)

    credibility: int = Field(ge=0, le=100)
    explanation: List[ExplanationItem]
    sources: List[SourceRef]
    fact_check: FactCheckSummary = Field(alias="factCheck")


class AnalysisReport(ReportBody):
    id: str
    type: ContentKind
    content: Optional[str] = None   # text scans
    filename: Optional[str] = None  # image / video scans
    timestamp: str
    status: Literal["completed"] = "completed"
    api_source: Optional[ApiSource] = Field(default=None, alias="apiSource")
    error: Optional[str] = None     # remote failure reason on mock-fallback


class TextAnalysisIn(BaseModel):
    content: Optional[str] = None
    url: Optional[str] = None


class DeepfakeAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    facial_consistency: int = Field(ge=0, le=100, alias="facialConsistency")
    audio_sync: int = Field(ge=0, le=100, alias="audioSync")
    lighting_consistency: int = Field(ge=0, le=100, alias="lightingConsistency")
    temporal_consistency: int = Field(ge=0, le=100, alias="temporalConsistency")


class DeepfakeResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    filename: str
    is_manipulated: bool = Field(alias="isManipulated")
    confidence: int = Field(ge=0, le=100)
    analysis: DeepfakeAnalysis
    timestamp: str
    recommendations: List[str]
    api_source: Optional[ApiSource] = Field(default=None, alias="apiSource")
    error: Optional[str] = None


class ReportIn(BaseModel):
    content: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    rating: Optional[Union[int, str]] = None  # "positive" / "negative" from the SPA


class Report(ReportIn):
    id: str
    timestamp: str
    status: Literal["submitted"] = "submitted"


class ReportAck(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    report_id: str = Field(alias="reportId")
