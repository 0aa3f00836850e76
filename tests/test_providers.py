import base64
from unittest.mock import MagicMock

import requests

from truthlens.providers import ProviderClient, RemoteFailure, RemoteSuccess


def _response(ok=True, status_code=200, reason="OK", payload=None):
    resp = MagicMock()
    resp.ok = ok
    resp.status_code = status_code
    resp.reason = reason
    resp.json.return_value = payload if payload is not None else {}
    return resp


def test_text_call_sends_document_with_api_key(settings):
    """
    WHY: Google's REST APIs authenticate with a `key` query parameter.
    HOW: Call analyze_text with a mocked session.
    EXPECTED: One POST to TEXT_ANALYSIS_API with the document body and key param.
    """
    session = MagicMock()
    session.post.return_value = _response(payload={"documentSentiment": {"score": 0.2}})
    client = ProviderClient(settings, session=session)

    result = client.analyze_text("hello world")

    assert result == RemoteSuccess({"documentSentiment": {"score": 0.2}})
    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args[0] == settings.TEXT_ANALYSIS_API
    assert kwargs["params"] == {"key": "test-key"}
    assert kwargs["json"]["document"] == {"content": "hello world", "type": "PLAIN_TEXT"}
    assert kwargs["json"]["encodingType"] == "UTF8"
    assert kwargs["timeout"] == settings.REMOTE_TIMEOUT_SECONDS


def test_image_call_sends_base64_and_features(settings):
    session = MagicMock()
    session.post.return_value = _response(payload={"responses": [{}]})
    client = ProviderClient(settings, session=session)

    client.analyze_image(b"\x89PNG")

    kwargs = session.post.call_args.kwargs
    request = kwargs["json"]["requests"][0]
    assert request["image"]["content"] == base64.b64encode(b"\x89PNG").decode("ascii")
    assert [f["type"] for f in request["features"]] == [
        "LABEL_DETECTION", "TEXT_DETECTION", "SAFE_SEARCH_DETECTION",
    ]


def test_video_and_deepfake_use_bearer_multipart(settings):
    session = MagicMock()
    session.post.return_value = _response(payload={"credibility": 60})
    client = ProviderClient(settings, session=session)

    client.analyze_video(b"frames", "clip.mp4")
    kwargs = session.post.call_args.kwargs
    assert session.post.call_args.args[0] == settings.VIDEO_ANALYSIS_API
    assert kwargs["headers"] == {"Authorization": "Bearer test-key"}
    assert kwargs["files"] == {"video": ("clip.mp4", b"frames")}
    assert kwargs["params"] is None

    client.detect_deepfake(b"frames", "face.mp4")
    kwargs = session.post.call_args.kwargs
    assert session.post.call_args.args[0] == settings.DEEPFAKE_API
    assert kwargs["files"] == {"media": ("face.mp4", b"frames")}


def test_non_2xx_becomes_failure(settings):
    """
    WHY: A provider error must never surface as an exception; the service falls back.
    HOW: Return a 503 from the mocked session.
    EXPECTED: RemoteFailure with status and reason, no retry.
    """
    session = MagicMock()
    session.post.return_value = _response(ok=False, status_code=503, reason="Service Unavailable")
    client = ProviderClient(settings, session=session)

    result = client.analyze_text("hello")

    assert result == RemoteFailure("Google Cloud API call failed: 503 Service Unavailable")
    assert session.post.call_count == 1


def test_network_error_becomes_failure(settings):
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError("connection refused")
    client = ProviderClient(settings, session=session)

    result = client.analyze_image(b"img")

    assert isinstance(result, RemoteFailure)
    assert "connection refused" in result.reason


def test_invalid_json_becomes_failure(settings):
    session = MagicMock()
    resp = _response()
    resp.json.side_effect = ValueError("Expecting value")
    session.post.return_value = resp
    client = ProviderClient(settings, session=session)

    result = client.detect_deepfake(b"x", "x.mp4")

    assert isinstance(result, RemoteFailure)
    assert result.reason.startswith("Deepfake API returned invalid JSON")


def test_non_object_json_becomes_failure(settings):
    session = MagicMock()
    session.post.return_value = _response(payload=[1, 2, 3])
    client = ProviderClient(settings, session=session)

    assert isinstance(client.analyze_text("x"), RemoteFailure)
