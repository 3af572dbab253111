"""
Streamlit rendering for the UCS form: input groups, buttons, result card,
and notifications.
"""

from __future__ import annotations

from typing import Any, MutableMapping

import streamlit as st

from ucs_predictor.domains.form.fields import FIELD_GROUPS, FIELD_NAMES, MIXING_MAX, format_value
from ucs_predictor.services.form_controller import FormController
from ucs_predictor.utils.logger import get_logger

logger = get_logger()

TITLE = "UCS PREDICTOR"
PREDICT_LABEL = "Predict UCS"
PREDICTING_LABEL = "Predicting..."
RESET_LABEL = "Reset"


def widget_key(field: str) -> str:
    return f"ucs_field_{field}"


def sync_widgets(controller: FormController, state: MutableMapping[str, Any]) -> None:
    """Copy the controller's record into widget state (picks up PI and capped Mixing)."""
    inputs = controller.inputs
    for field in FIELD_NAMES:
        state[widget_key(field)] = format_value(inputs[field])


def _on_field_change(controller: FormController, field: str, state: MutableMapping[str, Any]) -> None:
    controller.update_field(field, state.get(widget_key(field), ""))
    sync_widgets(controller, state)


def _on_reset(controller: FormController, state: MutableMapping[str, Any]) -> None:
    controller.reset()
    sync_widgets(controller, state)


def render_field(controller: FormController, field: str, st=st) -> None:
    key = widget_key(field)
    if key not in st.session_state:
        st.session_state[key] = format_value(controller.inputs[field])
    help_text = None
    if field == "PI":
        help_text = "Plasticity Index, computed as LL - PL."
    elif field == "Mixing":
        help_text = f"Capped at {int(MIXING_MAX)}."
    st.text_input(
        field,
        key=key,
        disabled=(field == "PI"),
        help=help_text,
        on_change=_on_field_change,
        args=(controller, field, st.session_state),
    )


def render_inputs(controller: FormController, st=st) -> None:
    """One bordered card per field group, fields laid out in a grid."""
    for group, fields in FIELD_GROUPS.items():
        with st.container(border=True):
            st.subheader(group)
            cols = st.columns(len(fields))
            for col, field in zip(cols, fields):
                with col:
                    render_field(controller, field, st=st)


def render_result(controller: FormController, st=st) -> None:
    if not controller.result or controller.busy:
        return
    with st.container(border=True):
        st.subheader("Predicted UCS")
        st.markdown(f"### {controller.result} MPa")


def render_notifications(controller: FormController, st=st) -> None:
    for message in controller.pop_notifications():
        st.error(message)


def _on_predict(controller: FormController) -> None:
    controller.request_submit()


def render_actions(controller: FormController, st=st) -> None:
    """Predict and Reset buttons. Predict only flags a pending submit; see run_pending_submit."""
    col1, col2 = st.columns(2)
    with col1:
        busy = controller.busy
        st.button(
            PREDICTING_LABEL if busy else PREDICT_LABEL,
            key="predict_ucs",
            disabled=busy,
            type="primary",
            on_click=_on_predict,
            args=(controller,),
            use_container_width=True,
        )
    with col2:
        st.button(
            RESET_LABEL,
            key="reset_form",
            on_click=_on_reset,
            args=(controller, st.session_state),
            use_container_width=True,
        )


def run_pending_submit(controller: FormController, st=st) -> None:
    """
    Run a submit flagged by the Predict callback.

    Called after the page is drawn, so the disabled "Predicting..." button is
    on screen while the request is in flight. Reruns afterwards to show the
    outcome with the button enabled again.
    """
    if not controller.pending:
        return
    with st.spinner(PREDICTING_LABEL):
        controller.submit()
    st.rerun()


def render_form(controller: FormController, st=st) -> None:
    st.title(TITLE)
    render_inputs(controller, st=st)
    render_actions(controller, st=st)
    render_notifications(controller, st=st)
    render_result(controller, st=st)
    run_pending_submit(controller, st=st)
