import logging
from importlib import metadata
import streamlit as st
from domain.constants import get_app_config
from ui.components import message_banner, format_near
from views.guard import protected
from views.runtime import get_runtime

# Import the page rendering functions from the view modules
from views import home, publish, overview, donate, not_found

try:
    VERSION = metadata.version('social-bounty-hunt')
except metadata.PackageNotFoundError:
    VERSION = '0.0.0'

# --- Page Registry ---
# Maps a page key to its label, rendering function and whether it needs a registered session.
PAGE_REGISTRY = {
    "home": {
        "label": "🏠 Home",
        "render_func": protected(lambda: home.view(VERSION)),
        "protected": True,
    },
    "publish": {
        "label": "📝 Publish",
        "render_func": protected(publish.view),
        "protected": True,
    },
    "overview": {
        "label": "📜 Overview",
        "render_func": protected(overview.view),
        "protected": True,
    },
    "donate": {
        "label": "💝 Donate",
        "render_func": protected(donate.view),
        "protected": True,
    },
}


def _configure_logging(level: str):
    if getattr(_configure_logging, "_applied", False):
        return
    _configure_logging._applied = True
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO),
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def main():
    """
    Main application router.

    Resolves the wallet session and any pending transaction signal once per
    run, then renders the selected page. Protected pages defer to the shared
    route guard.
    """
    config = get_app_config()
    _configure_logging(config['log_level'])
    st.set_page_config(page_title=config['app_title'], layout="wide")

    rt = get_runtime()
    rt.wallet.complete_sign_in()
    rt = get_runtime()  # rebinds the contract when the account changed
    identity = rt.wallet.account()
    with st.spinner("Checking registration…"):
        rt.session.resolve(identity)
    rt.notifier.consume()

    # --- Sidebar ---
    st.sidebar.title(config['app_title'])
    if identity:
        st.sidebar.markdown(f"**{identity.account_id}**")
        st.sidebar.caption(f"Balance: {format_near(identity.balance)}")
        if st.sidebar.button("Sign out"):
            rt.session.sign_out(rt.wallet)
            rt.feed.invalidate()
            st.rerun()

    page_keys = list(PAGE_REGISTRY.keys())
    page_labels = [v["label"] for v in PAGE_REGISTRY.values()]

    # Query param persistence: unknown page keys fall through to 404
    requested = rt.navigation.get('page') or 'home'
    if requested in PAGE_REGISTRY and 'navigation_radio' not in st.session_state:
        st.session_state.navigation_radio = PAGE_REGISTRY[requested]['label']

    selected_page_label = st.sidebar.radio("Menu", page_labels, key="navigation_radio")
    selected_page_key = page_keys[page_labels.index(selected_page_label)]
    if requested in PAGE_REGISTRY:
        requested = selected_page_key
        rt.navigation.update(page=requested)

    message_banner(rt.notifier.message, rt.notifier.kind, rt.notifier.dismiss)

    # --- Page Rendering ---
    if requested in PAGE_REGISTRY:
        PAGE_REGISTRY[requested]["render_func"]()
    else:
        not_found.view()

    st.sidebar.markdown("---")
    st.sidebar.caption(f"v{VERSION} | {config['network']} | {config['contract_name']}")


if __name__ == "__main__":
    main()
