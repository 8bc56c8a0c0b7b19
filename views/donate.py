import streamlit as st
from domain.constants import DONATION_MIN_NEAR, DONATION_MAX_NEAR
from views.runtime import get_runtime


def view():
    st.header("Donate NEAR.")
    rt = get_runtime()
    with st.form("form_donate"):
        st.write(
            "When you hit Donate the chosen amount of NEAR will be distributed to all DEED holders, "
            "excluding your own account. A new deed is created which shows that you donated."
        )
        amount = st.number_input(
            "Add the amount of Ⓝ you want to donate.",
            min_value=DONATION_MIN_NEAR, max_value=DONATION_MAX_NEAR, value=1, step=1,
            key="donate_amount")
        submitted = st.form_submit_button(
            "Donate", help="Donates the chosen amount of Ⓝ.",
            disabled=bool(rt.actions.pending))
    if submitted:
        result = rt.actions.donate(amount)
        if not result.signalled:
            st.error(result.error)
            return
        st.rerun()
