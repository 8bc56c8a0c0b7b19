import streamlit as st
from services.contract import ContractCallError
from ui.components import deeds_table
from views.runtime import get_runtime


def view(version: str = ""):
    rt = get_runtime()
    identity = rt.session.state.identity
    st.header(f"{rt.config['app_title']} {version}".strip())
    st.markdown(
        """
        Everyone can publish the good social deeds they performed in order to earn DEED.
        A deed comes with a description and a proof (a link to an image or gif).
        Others can credit a published deed; for each credit the author is rewarded with one DEED.

        DEED is non-transferable. It represents a user's social reputation. Users can also
        donate NEAR: the donation is distributed to all DEED holders proportional to their
        DEED amount, and a deed is created for the donor automatically.
        """
    )

    try:
        deed_balance = rt.contract.ft_balance_of(identity.account_id)
    except ContractCallError as e:
        st.warning(f"Could not load your DEED balance: {e}")
        deed_balance = None
    if deed_balance is not None:
        st.metric("Your DEED", deed_balance)

    st.subheader("Your deeds")
    result = rt.feed.ensure(identity.account_id)
    if result.status == 'error':
        st.warning(f"Could not load deeds: {result.error}")
    elif result.page is not None:
        deeds_table([d for d in result.page.deeds if d.author == identity.account_id])

    st.markdown("Publish your first deed on **Publish**, browse deeds on **Overview**, or **Donate** NEAR to all DEED holders.")
