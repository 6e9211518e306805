"""Runtime configuration read from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_REGION = "us-east-1"
DEFAULT_BEDROCK_MODEL = "amazon.titan-text-express-v1"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


def resolve_api_key(explicit: str | None, *env_names: str) -> str:
    """Return an explicit key if given, else the first non-empty env var."""
    if explicit and explicit.strip():
        return explicit.strip()
    for name in env_names:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


@dataclass
class Settings:
    region: str = DEFAULT_REGION
    label_detector: str = "rekognition"
    text_generator: str = "bedrock"
    bedrock_model_id: str = DEFAULT_BEDROCK_MODEL
    gemini_model: str = DEFAULT_GEMINI_MODEL
    openai_model: str = DEFAULT_OPENAI_MODEL
    log_level: str = "INFO"
    api_url: str = ""

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if env is None else env
        return cls(
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or DEFAULT_REGION,
            label_detector=(env.get("LABEL_DETECTOR") or "rekognition").lower(),
            text_generator=(env.get("TEXT_GENERATOR") or "bedrock").lower(),
            bedrock_model_id=env.get("BEDROCK_MODEL_ID") or DEFAULT_BEDROCK_MODEL,
            gemini_model=env.get("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            openai_model=env.get("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
            api_url=env.get("DESCRIBER_API_URL", ""),
        )

    def detector_kwargs(self) -> dict[str, str]:
        return {"region": self.region}

    def generator_kwargs(self) -> dict[str, str]:
        """Constructor arguments for the configured text generator."""
        if self.text_generator == "bedrock":
            return {"region": self.region, "model_id": self.bedrock_model_id}
        if self.text_generator == "gemini":
            return {"model": self.gemini_model}
        if self.text_generator == "openai":
            return {"model": self.openai_model}
        return {}
