import streamlit as st
from views.runtime import get_runtime


def view():
    st.header("Social Bounty Hunt Homepage")
    rt = get_runtime()
    identity = rt.session.state.identity
    if st.button("Register", disabled=bool(rt.actions.pending)):
        result = rt.actions.register(identity.account_id)
        if not result.signalled:
            st.error(f"Registration failed: {result.error}")
            return
        st.rerun()
    st.write(
        "To use the DEED token you must be registered to the smart contract. "
        "Without that you cannot use it. There is a small fee to pay for the "
        "registration in order to pay for the used storage."
    )
    st.write("Go ahead and register to finally try the app!")
