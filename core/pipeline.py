"""Describe pipeline: detect labels, build a prompt, generate a sentence."""

from __future__ import annotations

import logging

from core.detectors import LabelDetector
from core.generators import TextGenerator
from core.models import MAX_LABELS, MIN_CONFIDENCE, AnalysisResult, GenerationConfig
from core.prompt_builder import build_description_prompt
from prompts.templates import NO_LABELS_DESCRIPTION

logger = logging.getLogger(__name__)


def describe_image(
    image: bytes,
    detector: LabelDetector,
    generator: TextGenerator,
    config: GenerationConfig | None = None,
) -> AnalysisResult:
    """Run detection then generation for one image.

    The generator is skipped entirely when the detector returns no labels.
    Collaborator errors propagate to the caller.
    """
    detected = detector.detect_labels(
        image,
        max_labels=MAX_LABELS,
        min_confidence=MIN_CONFIDENCE,
    )
    labels = [label.name for label in detected]

    if not labels:
        logger.info("No labels above %s confidence, skipping generation", MIN_CONFIDENCE)
        return AnalysisResult(labels=[], description=NO_LABELS_DESCRIPTION)

    prompt = build_description_prompt(labels)
    text = generator.generate(prompt, config or GenerationConfig())
    description = text.strip()

    logger.info(
        "Described image via %s/%s: %d labels, %d chars",
        detector.detector_name, generator.generator_name, len(labels), len(description),
    )
    return AnalysisResult(labels=labels, description=description)
