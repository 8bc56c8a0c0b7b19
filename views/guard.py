"""Route guard shared by every protected page.

The session status alone picks the branch; pages never gate themselves.
"""
from typing import Callable
import streamlit as st
from domain.constants import (
    SESSION_UNAUTHENTICATED,
    SESSION_LOADING,
    SESSION_CHECK_FAILED,
    SESSION_UNREGISTERED,
    SESSION_REGISTERED,
)
from domain.models import SessionState

_BRANCHES = {
    SESSION_UNAUTHENTICATED: 'sign_in',
    SESSION_UNREGISTERED: 'register',
    SESSION_LOADING: 'loading',
    SESSION_CHECK_FAILED: 'error',
    SESSION_REGISTERED: 'content',
}


def select_branch(state: SessionState) -> str:
    return _BRANCHES[state.status]


def protected(render_content: Callable[[], None]) -> Callable[[], None]:
    """Wrap a page's view so it only renders once registration is confirmed."""
    def view():
        from views import sign_in, register
        from views.runtime import get_runtime

        rt = get_runtime()
        branch = select_branch(rt.session.state)
        if branch == 'sign_in':
            sign_in.view()
        elif branch == 'register':
            register.view()
        elif branch == 'loading':
            st.info("Checking your registration…")
        elif branch == 'error':
            st.error(f"Could not check your registration: {rt.session.state.error}")
            if st.button("Retry", key="session_retry"):
                rt.session.refresh()
                st.rerun()
        else:
            render_content()

    view.__name__ = getattr(render_content, '__name__', 'view')
    view.__wrapped__ = render_content
    return view
