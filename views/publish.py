import streamlit as st
from views.runtime import get_runtime


def view():
    st.header("Publish a social deed.")
    rt = get_runtime()
    identity = rt.session.state.identity
    with st.form("form_publish"):
        st.write("Describe your social deed and provide proof in form of an image or a gif.")
        title = st.text_input("The title of your deed.", key="publish_title")
        description = st.text_input("A short description of the deed.", key="publish_description")
        proof = st.text_input("An URL to an image or a gif as proof of the deed.", key="publish_proof")
        submitted = st.form_submit_button(
            "Publish", help="Publishes the social deed to the blockchain.",
            disabled=bool(rt.actions.pending))
    if submitted:
        result = rt.actions.publish(identity.account_id, title, description, proof)
        if not result.signalled:
            st.error(result.error)
            return
        st.rerun()
