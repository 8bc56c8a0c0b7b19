import html
import streamlit as st
from typing import Callable, Optional

from .base import inject_base_css, creditors_badge
from domain.constants import SIGNAL_FAILURE
from domain.models import Deed
from services.credit import decide, affordance


def proof_image_html(proof: str) -> str:
    """Proof image markup; the URL is user supplied and always escaped."""
    src = html.escape(proof, quote=True)
    return f"<div class='deed-proof'><img src='{src}' alt='{src}'/></div>"


def deed_card(deed: Deed, viewer_id: str, on_credit: Callable[[Deed], None]):
    """
    Displays a deed with its proof image and the credit action for this viewer.
    """
    inject_base_css()
    enabled, tooltip = affordance(decide(deed, viewer_id))
    with st.container(border=True):
        if deed.proof:
            st.markdown(proof_image_html(deed.proof), unsafe_allow_html=True)
        st.subheader(deed.title or f"Deed #{deed.id}")
        st.markdown(f"**Author: {deed.author}**")
        st.write(deed.description)
        c1, c2 = st.columns([1, 1])
        c1.markdown(creditors_badge(deed.creditors), unsafe_allow_html=True)
        if c2.button("Credit", key=f"credit_{deed.id}", help=tooltip, disabled=not enabled):
            on_credit(deed)


def message_banner(message: Optional[str], kind: str, on_dismiss: Callable[[], None]):
    """Persistent transaction message with a dismiss control (no timeout)."""
    if not message:
        return
    cols = st.columns([10, 1])
    with cols[0]:
        if kind == SIGNAL_FAILURE:
            st.error(message)
        else:
            st.success(message)
    if cols[1].button("✕", key="dismiss_message", help="Dismiss"):
        on_dismiss()
        st.rerun()
