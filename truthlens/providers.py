import base64
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import requests

from .config import Settings
from .errors import RemoteProviderError
from .log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RemoteSuccess:
    payload: Dict[str, Any]


@dataclass(frozen=True)
class RemoteFailure:
    reason: str


RemoteResult = Union[RemoteSuccess, RemoteFailure]


class ProviderClient:
    """Thin wrapper over the third-party AI endpoints.

    Every public method makes exactly one HTTP attempt and never raises:
    failures come back as RemoteFailure so the caller can fall back.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def analyze_text(self, content: str) -> RemoteResult:
        body = {
            "document": {"content": content, "type": "PLAIN_TEXT"},
            "encodingType": "UTF8",
        }
        return self._call("Google Cloud", self.settings.TEXT_ANALYSIS_API, keyed=True, json=body)

    def analyze_image(self, data: bytes) -> RemoteResult:
        body = {
            "requests": [{
                "image": {"content": base64.b64encode(data).decode("ascii")},
                "features": [
                    {"type": "LABEL_DETECTION", "maxResults": 10},
                    {"type": "TEXT_DETECTION", "maxResults": 10},
                    {"type": "SAFE_SEARCH_DETECTION"},
                ],
            }]
        }
        return self._call("Google Cloud Vision", self.settings.IMAGE_ANALYSIS_API, keyed=True, json=body)

    def analyze_video(self, data: bytes, filename: str) -> RemoteResult:
        return self._call("Video", self.settings.VIDEO_ANALYSIS_API, files={"video": (filename, data)})

    def detect_deepfake(self, data: bytes, filename: str) -> RemoteResult:
        return self._call("Deepfake", self.settings.DEEPFAKE_API, files={"media": (filename, data)})

    def _call(self, provider: str, endpoint: str, keyed: bool = False, **kwargs) -> RemoteResult:
        try:
            payload = self._post(provider, endpoint, keyed, **kwargs)
        except RemoteProviderError as e:
            logger.error(f"{provider} call failed: {e}")
            return RemoteFailure(str(e))
        logger.info(f"{provider} call successful")
        logger.debug(f"{provider} response: {payload}")
        return RemoteSuccess(payload)

    def _post(self, provider: str, endpoint: str, keyed: bool, **kwargs) -> Dict[str, Any]:
        # Google REST APIs take the key as a query param, the rest as a bearer token
        if keyed:
            params = {"key": self.settings.API_KEY}
            headers = {}
        else:
            params = None
            headers = {"Authorization": f"Bearer {self.settings.API_KEY}"}

        try:
            resp = self.session.post(
                endpoint,
                params=params,
                headers=headers,
                timeout=self.settings.REMOTE_TIMEOUT_SECONDS,
                **kwargs,
            )
        except requests.RequestException as e:
            raise RemoteProviderError(f"{provider} API call failed: {e}") from e

        if not resp.ok:
            raise RemoteProviderError(f"{provider} API call failed: {resp.status_code} {resp.reason}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise RemoteProviderError(f"{provider} API returned invalid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise RemoteProviderError(f"{provider} API returned an unexpected payload")
        return payload
