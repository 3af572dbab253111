"""
UCS Predictor — Streamlit UI entry point.
"""

import streamlit as st

# Load .env first so UCS_BACKEND_URL / LOG_LEVEL / UCS_LOG_FILE changes are picked up
from ucs_predictor.utils.config import load_config, log_file, log_level
load_config()

from ucs_predictor.infrastructure.prediction_client import PredictionClient
from ucs_predictor.services.form_controller import FormController
from ucs_predictor.ui.form_display import render_form
from ucs_predictor.utils.logger import setup_logger, get_logger

setup_logger("ucs_predictor", level=log_level(), log_file=log_file())
log = get_logger()

st.set_page_config(page_title="UCS Predictor", layout="centered")


# Initialize client - use cache_resource so one client is shared across reruns
@st.cache_resource
def get_prediction_client():
    return PredictionClient()


prediction_client = get_prediction_client()

if "form" not in st.session_state:
    st.session_state.form = FormController(prediction_client=prediction_client)
    log.info("New form session (backend: %s)", prediction_client.display_url)

with st.sidebar:
    st.header("Settings")
    st.caption(f"Backend: `{prediction_client.display_url}`")
    if prediction_client.timeout:
        st.caption(f"Timeout: {prediction_client.timeout:g}s")
    else:
        st.caption("Timeout: none")

render_form(st.session_state.form)
