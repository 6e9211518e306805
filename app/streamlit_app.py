"""Streamlit page for the image describe endpoint.

Upload an image, send it to the deployed endpoint, and show the detected
labels with the generated description.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.client import AnalysisError, DescriberClient
from core.config import Settings

load_dotenv()
settings = Settings.from_env()
logging.basicConfig(level=settings.log_level)

st.set_page_config(page_title="Image Describer", layout="centered")

st.title("Image Describer")
st.caption("Detects what is in a picture and writes one sentence about it.")

with st.sidebar:
    st.markdown("### Configuration")
    api_url = st.text_input(
        "Endpoint URL",
        value=settings.api_url,
        help="Optional: leave as-is to use DESCRIBER_API_URL from your environment/.env.",
    )

uploaded = st.file_uploader("Choose an image", type=["jpg", "jpeg", "png"])

if uploaded is not None:
    data = uploaded.getvalue()
    st.image(data, width="stretch")

    if st.button("Describe", type="primary", disabled=not api_url):
        client = DescriberClient(api_url)
        try:
            with st.spinner("Analyzing image..."):
                result = client.describe(data)
        except AnalysisError as e:
            st.error(f"Error {e.status_code}: {e.message}")
        except Exception as e:
            st.error(f"Request failed: {e}")
        else:
            st.subheader("Description")
            st.write(result.description)
            st.subheader("Labels")
            if result.labels:
                st.write(", ".join(result.labels))
            else:
                st.caption("No labels detected.")
        finally:
            client.close()
    elif not api_url:
        st.info("Set the endpoint URL in the sidebar to describe images.")
