"""Label detector interface and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from core.config import DEFAULT_REGION
from core.models import MAX_LABELS, MIN_CONFIDENCE, DetectedLabel, DetectorName

logger = logging.getLogger(__name__)


class LabelDetector(ABC):
    """Base interface for image label detection services."""

    detector_name: str = "base"

    @abstractmethod
    def detect_labels(
        self,
        image: bytes,
        max_labels: int = MAX_LABELS,
        min_confidence: float = MIN_CONFIDENCE,
    ) -> list[DetectedLabel]:
        """Return labels found in ``image``, highest confidence first."""
        ...


class RekognitionLabelDetector(LabelDetector):
    """AWS Rekognition DetectLabels."""

    detector_name = DetectorName.REKOGNITION.value

    def __init__(self, client: Any = None, region: str = DEFAULT_REGION) -> None:
        self.region = region
        self._client = client

    def _get_client(self):
        if self._client is None:
            import boto3
            self._client = boto3.client("rekognition", region_name=self.region)
        return self._client

    def detect_labels(
        self,
        image: bytes,
        max_labels: int = MAX_LABELS,
        min_confidence: float = MIN_CONFIDENCE,
    ) -> list[DetectedLabel]:
        client = self._get_client()
        response = client.detect_labels(
            Image={"Bytes": image},
            MaxLabels=max_labels,
            MinConfidence=min_confidence,
        )

        labels = [
            DetectedLabel(name=item["Name"], confidence=float(item.get("Confidence", 0.0)))
            for item in response["Labels"]
        ]
        logger.info(
            "Rekognition returned %d labels (max=%d, min_confidence=%s)",
            len(labels), max_labels, min_confidence,
        )
        return labels


def get_detector(name: str, **kwargs) -> LabelDetector:
    """Factory function to get a label detector by name."""
    detectors: dict[str, type[LabelDetector]] = {
        DetectorName.REKOGNITION.value: RekognitionLabelDetector,
    }
    if name not in detectors:
        raise ValueError(f"Unknown label detector: {name}. Available: {list(detectors.keys())}")
    return detectors[name](**kwargs)
