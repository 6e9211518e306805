"""Serverless entrypoint for the image describe endpoint.

Speaks the gateway proxy-integration contract: the event carries the HTTP
method and a JSON body, and the return value is a dict with ``statusCode``,
``headers`` and a JSON string ``body``.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any

from dotenv import load_dotenv

from core.config import Settings
from core.detectors import LabelDetector, get_detector
from core.generators import TextGenerator, get_generator
from core.models import AnalysisRequest
from core.pipeline import describe_image
from prompts.templates import NO_IMAGE_ERROR

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "OPTIONS,POST",
}


def _response(status_code: int, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    headers = dict(CORS_HEADERS)
    if payload is None:
        return {"statusCode": status_code, "headers": headers, "body": ""}

    headers["Content-Type"] = "application/json"
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(payload),
    }


def _method(event: dict[str, Any]) -> str:
    # REST APIs put the method at the top level, HTTP APIs under requestContext.
    method = event.get("httpMethod")
    if not method:
        http = (event.get("requestContext") or {}).get("http") or {}
        method = http.get("method") or ""
    return str(method).upper()


def _parse_body(event: dict[str, Any]) -> Any:
    raw = event.get("body")
    if raw is None or raw == "":
        return {}
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    return json.loads(raw)


def handle_request(
    event: dict[str, Any],
    detector: LabelDetector,
    generator: TextGenerator,
) -> dict[str, Any]:
    """Handle one gateway event with the given collaborators."""
    if _method(event) == "OPTIONS":
        return _response(200)

    try:
        request = AnalysisRequest.from_body(_parse_body(event))
        if request is None:
            return _response(400, {"error": NO_IMAGE_ERROR})

        result = describe_image(request.image, detector, generator)
        return _response(200, result.to_dict())

    except Exception as e:
        logger.error("Describe request failed: %s", e)
        return _response(500, {"error": str(e)})


_services: tuple[LabelDetector, TextGenerator] | None = None


def _default_services() -> tuple[LabelDetector, TextGenerator]:
    global _services
    if _services is None:
        load_dotenv()
        settings = Settings.from_env()
        logging.basicConfig(level=settings.log_level)
        _services = (
            get_detector(settings.label_detector, **settings.detector_kwargs()),
            get_generator(settings.text_generator, **settings.generator_kwargs()),
        )
    return _services


def handler(event, context=None):
    """Serverless function handler."""
    if _method(event) == "OPTIONS":
        return _response(200)

    try:
        detector, generator = _default_services()
    except Exception as e:
        logger.error("Could not configure services: %s", e)
        return _response(500, {"error": str(e)})

    return handle_request(event, detector, generator)
