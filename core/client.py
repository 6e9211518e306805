"""HTTP client for the describe endpoint, plus upload preparation helpers."""

from __future__ import annotations

import base64
import io
import logging

import httpx
from PIL import Image

from core.models import AnalysisResult

logger = logging.getLogger(__name__)

# Synchronous function invocations reject request payloads above 6 MB.
MAX_PAYLOAD_BYTES = 6 * 1024 * 1024
PAYLOAD_OVERHEAD_BYTES = 1024
# Rekognition rejects raw image bytes above 5 MB; base64 inflates by 4/3 on the wire.
MAX_IMAGE_BYTES = min(
    5 * 1024 * 1024,
    (MAX_PAYLOAD_BYTES - PAYLOAD_OVERHEAD_BYTES) // 4 * 3,
)
JPEG_QUALITY = 90


class AnalysisError(Exception):
    """The endpoint answered with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def shrink_to_fit(image: Image.Image, max_bytes: int = MAX_IMAGE_BYTES) -> bytes:
    """Re-encode as JPEG, halving the longest side until it fits in ``max_bytes``."""
    img = image.convert("RGB")
    while True:
        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=JPEG_QUALITY)
        data = buf.getvalue()
        if len(data) <= max_bytes or max(img.size) <= 1:
            return data
        new_size = (max(1, img.width // 2), max(1, img.height // 2))
        logger.info("Image is %d bytes, downscaling to %dx%d", len(data), *new_size)
        img = img.resize(new_size, Image.LANCZOS)


def prepare_image(data: bytes, max_bytes: int = MAX_IMAGE_BYTES) -> bytes:
    """Return upload-ready bytes; images already under the limit pass through untouched."""
    if len(data) <= max_bytes:
        return data
    with Image.open(io.BytesIO(data)) as image:
        return shrink_to_fit(image, max_bytes)


def encode_image(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class DescriberClient:
    """Posts images to a deployed describe endpoint."""

    def __init__(
        self,
        api_url: str,
        http: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        if not api_url:
            raise ValueError("Describe endpoint URL is required. Set DESCRIBER_API_URL or pass api_url.")
        self.api_url = api_url
        self._http = http or httpx.Client(timeout=timeout)

    def describe(self, data: bytes) -> AnalysisResult:
        payload = {"image": encode_image(prepare_image(data))}
        resp = self._http.post(self.api_url, json=payload)

        if resp.is_success:
            return AnalysisResult.from_dict(resp.json())

        message = resp.text
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            message = body["error"]
        raise AnalysisError(resp.status_code, message)

    def close(self) -> None:
        self._http.close()
