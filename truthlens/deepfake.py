"""Placeholder deepfake detector.

There is no model behind this: the verdict and every sub-score are random
draws and only the filename is echoed back. The response shape is what the
frontend expects from a real detector.
"""
import random
import uuid

from .models import DeepfakeAnalysis, DeepfakeResult, utc_timestamp

MANIPULATED_RATE = 0.4

MANIPULATED_RECOMMENDATIONS = [
    "Verify with original source",
    "Check multiple angles",
    "Look for inconsistencies",
]
AUTHENTIC_RECOMMENDATIONS = [
    "Appears authentic",
    "No major red flags detected",
    "Consider source verification",
]

_rng = random.Random()


def synthesize_detection(filename: str, rng=None) -> DeepfakeResult:
    rng = rng or _rng
    is_manipulated = rng.random() < MANIPULATED_RATE
    recommendations = MANIPULATED_RECOMMENDATIONS if is_manipulated else AUTHENTIC_RECOMMENDATIONS

    return DeepfakeResult(
        id=str(uuid.uuid4()),
        filename=filename,
        is_manipulated=is_manipulated,
        confidence=rng.randint(60, 100),
        analysis=DeepfakeAnalysis(
            facial_consistency=rng.randint(0, 100),
            audio_sync=rng.randint(0, 100),
            lighting_consistency=rng.randint(0, 100),
            temporal_consistency=rng.randint(0, 100),
        ),
        timestamp=utc_timestamp(),
        recommendations=list(recommendations),
    )
