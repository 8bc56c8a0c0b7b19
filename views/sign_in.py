import streamlit as st
from domain.constants import SIGN_IN_METHODS
from views.runtime import get_runtime


def view():
    st.header("Sign in")
    st.write("Sign in with your NEAR account to publish, browse and credit social deeds.")
    rt = get_runtime()
    with st.form("form_sign_in"):
        account_id = st.text_input("Account id", placeholder="alice.testnet", key="sign_in_account")
        submitted = st.form_submit_button("Sign in")
    if submitted:
        rt.wallet.request_sign_in(
            rt.config['contract_name'],
            SIGN_IN_METHODS,
            account_id=account_id,
        )
        st.rerun()
