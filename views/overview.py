import streamlit as st
from domain.models import Deed
from ui.components import deed_card
from views.runtime import get_runtime


def view():
    st.header("All deeds that were published.")
    rt = get_runtime()
    viewer_id = rt.session.state.identity.account_id

    if st.button("Refresh", key="feed_refresh"):
        rt.feed.invalidate()
    result = rt.feed.ensure(viewer_id)
    if result.status == 'error':
        st.error(f"Could not load deeds: {result.error}")
        return
    if result.page is None or not result.page.deeds:
        st.caption("No deeds have been published yet.")
        return

    def on_credit(deed: Deed):
        outcome = rt.actions.credit(deed, viewer_id)
        if not outcome.signalled:
            st.warning(outcome.error)
            return
        st.rerun()

    for row in result.page:
        cols = st.columns(2)
        for col, deed in zip(cols, row):
            with col:
                deed_card(deed, viewer_id, on_credit)
