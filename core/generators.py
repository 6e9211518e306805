"""Text generation interface and implementations.

Each generator turns a prompt plus a :class:`GenerationConfig` into a single
sentence. Only the first candidate a service returns is used.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from core.config import (
    DEFAULT_BEDROCK_MODEL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_REGION,
    resolve_api_key,
)
from core.models import GenerationConfig, GeneratorName

logger = logging.getLogger(__name__)


class TextGenerator(ABC):
    """Base interface for text generation services."""

    generator_name: str = "base"

    @abstractmethod
    def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        ...


class BedrockTextGenerator(TextGenerator):
    """Amazon Bedrock InvokeModel with the Titan Text request format."""

    generator_name = GeneratorName.BEDROCK.value

    def __init__(
        self,
        client: Any = None,
        region: str = DEFAULT_REGION,
        model_id: str = DEFAULT_BEDROCK_MODEL,
    ) -> None:
        self.region = region
        self.model_id = model_id
        self._client = client

    def _get_client(self):
        if self._client is None:
            import boto3
            self._client = boto3.client("bedrock-runtime", region_name=self.region)
        return self._client

    def build_body(self, prompt: str, config: GenerationConfig) -> dict[str, Any]:
        return {
            "inputText": prompt,
            "textGenerationConfig": config.to_titan(),
        }

    def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        config = config or GenerationConfig()
        client = self._get_client()
        logger.info("Generating text via Bedrock model=%s", self.model_id)

        response = client.invoke_model(
            modelId=self.model_id,
            contentType="application/json",
            accept="application/json",
            body=json.dumps(self.build_body(prompt, config)),
        )

        payload = json.loads(response["body"].read())
        return payload["results"][0]["outputText"]


class GeminiTextGenerator(TextGenerator):
    """Google Gemini text generation."""

    generator_name = GeneratorName.GEMINI.value

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_GEMINI_MODEL,
        client: Any = None,
    ) -> None:
        self.api_key = resolve_api_key(api_key, "GEMINI_API_KEY", "GOOGLE_API_KEY")
        self.model = model
        self._client = client
        if not self.api_key and client is None:
            raise ValueError(
                "Gemini API key is required. Set GEMINI_API_KEY or GOOGLE_API_KEY or pass api_key."
            )

    def _get_client(self):
        if self._client is None:
            from google import genai
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        config = config or GenerationConfig()
        client = self._get_client()
        logger.info("Generating text via Gemini model=%s", self.model)

        options: dict[str, Any] = {
            "temperature": config.temperature,
            "top_p": config.top_p,
            "max_output_tokens": config.max_token_count,
        }
        if config.stop_sequences:
            options["stop_sequences"] = list(config.stop_sequences)

        response = client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=options,
        )

        if not response.text:
            raise RuntimeError("Gemini returned no text. The prompt may have been filtered.")
        return response.text


class OpenAITextGenerator(TextGenerator):
    """OpenAI chat completions."""

    generator_name = GeneratorName.OPENAI.value

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_OPENAI_MODEL,
        client: Any = None,
    ) -> None:
        self.api_key = resolve_api_key(api_key, "OPENAI_API_KEY")
        self.model = model
        self._client = client
        if not self.api_key and client is None:
            raise ValueError("OpenAI API key is required. Set OPENAI_API_KEY or pass api_key.")

    def _get_client(self):
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        config = config or GenerationConfig()
        client = self._get_client()
        logger.info("Generating text via OpenAI model=%s", self.model)

        response = client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=config.max_token_count,
            temperature=config.temperature,
            top_p=config.top_p,
            stop=list(config.stop_sequences) or None,
            n=1,
        )

        if not response.choices:
            raise RuntimeError("OpenAI returned no completions.")
        return response.choices[0].message.content or ""


def get_generator(name: str, **kwargs) -> TextGenerator:
    """Factory function to get a text generator by name."""
    generators: dict[str, type[TextGenerator]] = {
        GeneratorName.BEDROCK.value: BedrockTextGenerator,
        GeneratorName.GEMINI.value: GeminiTextGenerator,
        GeneratorName.OPENAI.value: OpenAITextGenerator,
    }
    if name not in generators:
        raise ValueError(f"Unknown text generator: {name}. Available: {list(generators.keys())}")
    return generators[name](**kwargs)
