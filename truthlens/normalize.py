"""Map third-party AI responses onto the local report shapes."""
import math
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from .errors import RemoteProviderError
from .models import ContentKind, DeepfakeResult, ExplanationItem, FactCheckSummary, ReportBody, SourceRef
from .scoring import band_for, build_report, clamp

REPORT_FIELDS = ("credibility", "explanation", "sources", "factCheck")
DEEPFAKE_FIELDS = ("isManipulated", "confidence", "analysis", "recommendations")


def _sentiment_status(score: float) -> str:
    if score > 0.1:
        return "Positive"
    if score < -0.1:
        return "Negative"
    return "Neutral"


def _review_status(credibility: int) -> str:
    return "Analyzed" if credibility >= 70 else "Requires Review"


def sentiment_report(payload: Dict[str, Any]) -> ReportBody:
    """Google Cloud Natural Language analyzeSentiment -> ReportBody.

    Sentiment in [-1, 1] is stretched linearly onto the credibility scale.
    """
    try:
        doc = payload.get("documentSentiment") or {}
        sentiment = float(doc.get("score") or 0.0)
        if not math.isfinite(sentiment):
            raise ValueError(f"non-finite score {sentiment}")
        magnitude = doc.get("magnitude") or 0
    except (AttributeError, TypeError, ValueError) as e:
        raise RemoteProviderError(f"Unexpected sentiment response: {e}") from e

    credibility = clamp(round((sentiment + 1) * 50))
    quality = {"high": "High Quality", "medium": "Medium Quality", "low": "Low Quality"}[band_for(credibility)]

    return ReportBody(
        credibility=credibility,
        explanation=[
            ExplanationItem(
                title="Sentiment Analysis",
                status=_sentiment_status(sentiment),
                description=f"Google Cloud sentiment analysis: {sentiment:.2f}",
                confidence=min(100, round(abs(sentiment) * 100)),
            ),
            ExplanationItem(
                title="Content Quality",
                status=quality,
                description="Content analyzed using Google Cloud Natural Language API",
                confidence=credibility,
            ),
        ],
        sources=[
            SourceRef(name="Google Cloud Natural Language", credibility="High",
                      url="https://cloud.google.com/natural-language"),
        ],
        fact_check=FactCheckSummary(
            status=_review_status(credibility),
            summary=f"Content analyzed using Google Cloud AI. Sentiment score: {sentiment:.2f}",
            details=[
                "Analyzed using Google Cloud Natural Language API",
                f"Sentiment magnitude: {magnitude}",
                "Content processed for emotional tone and language patterns",
            ],
        ),
    )


def vision_report(payload: Dict[str, Any]) -> ReportBody:
    """Google Cloud Vision images:annotate -> ReportBody.

    Starts from 80 and only safe-search adult/violence likelihoods lower it.
    """
    try:
        first = (payload.get("responses") or [{}])[0]
        labels = [str(l.get("description") or "") for l in first.get("labelAnnotations") or []]
        safe = first.get("safeSearchAnnotation") or {}
        adult, violence = safe.get("adult"), safe.get("violence")
    except (AttributeError, IndexError, TypeError) as e:
        raise RemoteProviderError(f"Unexpected vision response: {e}") from e

    very_likely = "VERY_LIKELY" in (adult, violence)
    credibility = 80
    if very_likely:
        credibility -= 40
    elif "LIKELY" in (adult, violence):
        credibility -= 20
    credibility = clamp(credibility)

    return ReportBody(
        credibility=credibility,
        explanation=[
            ExplanationItem(
                title="Content Safety",
                status="Unsafe" if very_likely else "Safe",
                description="Google Cloud safe search analysis completed",
                confidence=90,
            ),
            ExplanationItem(
                title="Image Analysis",
                status="Analyzed" if labels else "No Labels Detected",
                description=f"Detected {len(labels)} content labels using Google Cloud Vision",
                confidence=85,
            ),
        ],
        sources=[
            SourceRef(name="Google Cloud Vision API", credibility="High", url="https://cloud.google.com/vision"),
        ],
        fact_check=FactCheckSummary(
            status=_review_status(credibility),
            summary=f"Image analyzed using Google Cloud Vision API. Safety score: {credibility}%",
            details=[
                "Analyzed using Google Cloud Vision API",
                f"Detected labels: {', '.join(labels)}",
                f"Safe search: Adult={adult}, Violence={violence}",
            ],
        ),
    )


def merge_report(base: ReportBody, payload: Dict[str, Any], kind: ContentKind) -> ReportBody:
    """Overlay the report fields a remote provider returned onto `base`.

    A remote credibility replaces the whole template set with the one for its
    band, so explanation and factCheck never describe a different score than
    the one reported. Explicit remote explanation/factCheck still win.
    """
    overrides = {k: payload[k] for k in REPORT_FIELDS if k in payload}
    if not overrides:
        raise RemoteProviderError("Provider response has no report fields")
    try:
        merged = ReportBody.model_validate({**base.model_dump(by_alias=True), **overrides})
        if "credibility" in overrides:
            rebuilt = build_report(merged.credibility, kind)
            merged = ReportBody.model_validate({**rebuilt.model_dump(by_alias=True), **overrides})
    except PydanticValidationError as e:
        raise RemoteProviderError(f"Unexpected report fields in provider response: {e.error_count()} invalid") from e
    return merged


def merge_deepfake(base: DeepfakeResult, payload: Dict[str, Any]) -> DeepfakeResult:
    overrides = {k: payload[k] for k in DEEPFAKE_FIELDS if k in payload}
    if not overrides:
        raise RemoteProviderError("Deepfake provider response has no detection fields")
    merged = {**base.model_dump(by_alias=True), **overrides}
    try:
        return DeepfakeResult.model_validate(merged)
    except PydanticValidationError as e:
        raise RemoteProviderError(f"Unexpected deepfake fields in provider response: {e.error_count()} invalid") from e
