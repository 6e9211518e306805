"""Data models for the image label describer."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MAX_LABELS = 10
MIN_CONFIDENCE = 80.0


class DetectorName(str, Enum):
    REKOGNITION = "rekognition"


class GeneratorName(str, Enum):
    BEDROCK = "bedrock"
    GEMINI = "gemini"
    OPENAI = "openai"


@dataclass
class AnalysisRequest:
    image: bytes

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> AnalysisRequest | None:
        """Build a request from a parsed JSON body.

        Returns None when the ``image`` field is missing, empty or blank. The field is
        base64-decoded without pre-validation, so malformed data raises.
        """
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object.")

        encoded = body.get("image")
        if not encoded or (isinstance(encoded, str) and not encoded.strip()):
            return None
        return cls(image=base64.b64decode(encoded))


@dataclass
class DetectedLabel:
    name: str
    confidence: float = 0.0


@dataclass
class GenerationConfig:
    max_token_count: int = 100
    stop_sequences: list[str] = field(default_factory=list)
    temperature: float = 0.7
    top_p: float = 0.9

    def to_titan(self) -> dict[str, Any]:
        """Titan Text ``textGenerationConfig`` block."""
        return {
            "maxTokenCount": self.max_token_count,
            "stopSequences": list(self.stop_sequences),
            "temperature": self.temperature,
            "topP": self.top_p,
        }


@dataclass
class AnalysisResult:
    labels: list[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"labels": list(self.labels), "description": self.description}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisResult:
        return cls(
            labels=[str(label) for label in data.get("labels", [])],
            description=str(data.get("description", "")),
        )
