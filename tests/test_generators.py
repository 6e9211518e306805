from pathlib import Path
import io
import json
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.generators import (
    BedrockTextGenerator,
    GeminiTextGenerator,
    OpenAITextGenerator,
    get_generator,
)
from core.models import GenerationConfig


def bedrock_client(payload):
    client = MagicMock()
    client.invoke_model.return_value = {
        "body": io.BytesIO(json.dumps(payload).encode("utf-8")),
        "contentType": "application/json",
    }
    return client


def test_bedrock_sends_titan_generation_config():
    client = bedrock_client({"results": [{"outputText": " A dog. "}, {"outputText": "ignored"}]})
    generator = BedrockTextGenerator(client=client, model_id="amazon.titan-text-express-v1")

    text = generator.generate("describe this", GenerationConfig())

    assert text == " A dog. "
    kwargs = client.invoke_model.call_args.kwargs
    assert kwargs["modelId"] == "amazon.titan-text-express-v1"
    assert kwargs["contentType"] == "application/json"
    assert json.loads(kwargs["body"]) == {
        "inputText": "describe this",
        "textGenerationConfig": {
            "maxTokenCount": 100,
            "stopSequences": [],
            "temperature": 0.7,
            "topP": 0.9,
        },
    }


def test_bedrock_missing_results_raises():
    generator = BedrockTextGenerator(client=bedrock_client({"outputs": []}))
    with pytest.raises(KeyError):
        generator.generate("describe this")


def test_gemini_maps_config_and_omits_empty_stop_sequences():
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(text="A dog in a park.")
    generator = GeminiTextGenerator(client=client, model="gemini-2.0-flash")

    assert generator.generate("describe this") == "A dog in a park."
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-2.0-flash"
    assert kwargs["contents"] == "describe this"
    assert kwargs["config"] == {"temperature": 0.7, "top_p": 0.9, "max_output_tokens": 100}


def test_gemini_empty_response_raises():
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(text=None)
    generator = GeminiTextGenerator(client=client)
    with pytest.raises(RuntimeError):
        generator.generate("describe this")


def test_openai_uses_first_choice():
    client = MagicMock()
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="A dog."))]
    )
    generator = OpenAITextGenerator(client=client, model="gpt-4o-mini")

    assert generator.generate("describe this") == "A dog."
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["max_tokens"] == 100
    assert kwargs["temperature"] == 0.7
    assert kwargs["top_p"] == 0.9
    assert kwargs["stop"] is None


def test_get_generator_returns_bedrock():
    generator = get_generator("bedrock", region="eu-west-1", model_id="amazon.titan-text-lite-v1")
    assert isinstance(generator, BedrockTextGenerator)
    assert generator.region == "eu-west-1"
    assert generator.model_id == "amazon.titan-text-lite-v1"


def test_get_generator_unknown_name():
    with pytest.raises(ValueError, match="Unknown text generator"):
        get_generator("nope")
