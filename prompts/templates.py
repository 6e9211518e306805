"""Prompt templates and fixed response messages."""

from __future__ import annotations

from string import Template

# --- Generation prompt ---

DESCRIPTION_PROMPT = Template(
    "Based on the following labels detected in an image: $labels. "
    "Please generate a single, descriptive sentence about the image."
)

LABEL_SEPARATOR = ", "

# --- Fixed messages ---

NO_LABELS_DESCRIPTION = (
    "Could not detect any labels with high confidence. Please try another image."
)

NO_IMAGE_ERROR = "No image provided in the request body."
