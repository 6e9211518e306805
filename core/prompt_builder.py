"""Prompt builder that converts detected labels into a generation prompt."""

from __future__ import annotations

import logging

from prompts.templates import DESCRIPTION_PROMPT, LABEL_SEPARATOR

logger = logging.getLogger(__name__)


def build_description_prompt(labels: list[str]) -> str:
    """Join labels in detector order and embed them in the description template."""
    prompt = DESCRIPTION_PROMPT.substitute(labels=LABEL_SEPARATOR.join(labels))
    logger.debug("Built prompt for %d labels: %s", len(labels), prompt)
    return prompt
