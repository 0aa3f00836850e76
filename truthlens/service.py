import random
import time
import uuid
from typing import Callable, List, Optional, Tuple

from .config import Settings
from .deepfake import synthesize_detection
from .errors import NotFoundError, RemoteProviderError, ValidationError
from .log import get_logger
from .models import (
    AnalysisReport,
    ApiSource,
    ContentKind,
    DeepfakeResult,
    Report,
    ReportAck,
    ReportBody,
    ReportIn,
    utc_timestamp,
)
from .normalize import merge_deepfake, merge_report, sentiment_report, vision_report
from .providers import ProviderClient, RemoteFailure, RemoteResult
from .scoring import generate_analysis
from .store import HistoryStore, InMemoryStore

logger = get_logger(__name__)

RECENT_SCANS = 10


class AnalysisService:
    """Runs analyses, keeps scan and report history.

    With USE_REAL_API the remote provider is always tried first; any
    RemoteFailure (or a response that cannot be normalized) yields the local
    heuristic result tagged "mock-fallback" and carrying the failure reason.
    """

    def __init__(
        self,
        settings: Settings,
        scans: Optional[HistoryStore] = None,
        reports: Optional[HistoryStore] = None,
        provider: Optional[ProviderClient] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.scans = scans if scans is not None else InMemoryStore()
        self.reports = reports if reports is not None else InMemoryStore()
        self.provider = provider or ProviderClient(settings)
        self.rng = rng or random.Random()
        self.sleep = sleep

    # --- Analyses ---

    def analyze_text(self, content: Optional[str], url: Optional[str]) -> AnalysisReport:
        content = (content or "").strip()
        url = (url or "").strip()
        if not content and not url:
            raise ValidationError("Content or URL is required")

        subject = content or f"URL: {url}"
        body, api_source, error = self._run(
            ContentKind.TEXT,
            subject,
            lambda: self.provider.analyze_text(subject),
            sentiment_report,
        )
        report = self._record(ContentKind.TEXT, body, api_source, error, content=subject)
        self._pause(self.settings.TEXT_DELAY_SECONDS)
        return report

    def analyze_image(self, data: bytes, filename: str) -> AnalysisReport:
        body, api_source, error = self._run(
            ContentKind.IMAGE,
            filename,
            lambda: self.provider.analyze_image(data),
            vision_report,
        )
        report = self._record(ContentKind.IMAGE, body, api_source, error, filename=filename)
        self._pause(self.settings.IMAGE_DELAY_SECONDS)
        return report

    def analyze_video(self, data: bytes, filename: str) -> AnalysisReport:
        body, api_source, error = self._run(
            ContentKind.VIDEO,
            filename,
            lambda: self.provider.analyze_video(data, filename),
            lambda payload: merge_report(
                generate_analysis(filename, ContentKind.VIDEO, self.rng), payload, ContentKind.VIDEO
            ),
        )
        report = self._record(ContentKind.VIDEO, body, api_source, error, filename=filename)
        self._pause(self.settings.VIDEO_DELAY_SECONDS)
        return report

    def detect_deepfake(self, data: bytes, filename: str) -> DeepfakeResult:
        result = synthesize_detection(filename, self.rng)
        api_source: ApiSource = "mock"

        if self.settings.USE_REAL_API:
            outcome = self.provider.detect_deepfake(data, filename)
            reason = self._remote_reason(outcome)
            if reason is None:
                try:
                    result = merge_deepfake(result, outcome.payload)
                    api_source = "real"
                except RemoteProviderError as e:
                    reason = str(e)
            if reason is not None:
                logger.warning(f"Deepfake detection falling back to placeholder: {reason}")
                api_source = "mock-fallback"
                result = result.model_copy(update={"error": reason})

        result = result.model_copy(update={"api_source": api_source})
        logger.info(
            f"Deepfake check {result.id} ({result.filename}): "
            f"manipulated={result.is_manipulated} confidence={result.confidence}%"
        )
        self._pause(self.settings.DEEPFAKE_DELAY_SECONDS)
        return result

    # --- History ---

    def recent_scans(self, limit: int = RECENT_SCANS) -> List[AnalysisReport]:
        return self.scans.list(limit=limit, newest_first=True)

    def get_scan(self, scan_id: str) -> AnalysisReport:
        scan = self.scans.get_by_id(scan_id)
        if scan is None:
            raise NotFoundError("Scan not found")
        return scan

    def submit_report(self, payload: ReportIn) -> ReportAck:
        report = Report(
            id=str(uuid.uuid4()),
            timestamp=utc_timestamp(),
            **payload.model_dump(),
        )
        self.reports.append(report)
        logger.info(f"Report {report.id} submitted (type={report.type}, rating={report.rating})")
        return ReportAck(message="Report submitted successfully", report_id=report.id)

    def list_reports(self) -> List[Report]:
        return self.reports.list()

    # --- Helpers ---

    def _run(
        self,
        kind: ContentKind,
        subject: str,
        remote: Callable[[], RemoteResult],
        normalize: Callable[[dict], ReportBody],
    ) -> Tuple[ReportBody, ApiSource, Optional[str]]:
        if not self.settings.USE_REAL_API:
            logger.info(f"Using mock data for {kind.value} analysis")
            return generate_analysis(subject, kind, self.rng), "mock", None

        logger.info(f"Using real API for {kind.value} analysis")
        outcome = remote()
        reason = self._remote_reason(outcome)
        if reason is None:
            try:
                return normalize(outcome.payload), "real", None
            except RemoteProviderError as e:
                reason = str(e)

        logger.warning(f"{kind.value.capitalize()} analysis falling back to mock data: {reason}")
        return generate_analysis(subject, kind, self.rng), "mock-fallback", reason

    @staticmethod
    def _remote_reason(outcome: RemoteResult) -> Optional[str]:
        if isinstance(outcome, RemoteFailure):
            return outcome.reason
        return None

    def _record(
        self,
        kind: ContentKind,
        body: ReportBody,
        api_source: ApiSource,
        error: Optional[str],
        content: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> AnalysisReport:
        report = AnalysisReport(
            **body.model_dump(),
            id=str(uuid.uuid4()),
            type=kind,
            content=content,
            filename=filename,
            timestamp=utc_timestamp(),
            api_source=api_source,
            error=error,
        )
        self.scans.append(report)

        preview = content[:100] if content is not None else filename
        logger.info(
            f"Analysis completed: id={report.id} type={kind.value} source={api_source} "
            f"credibility={report.credibility}% status={report.fact_check.status} subject={preview!r}"
        )
        return report

    def _pause(self, seconds: float):
        if seconds > 0:
            self.sleep(seconds)
