"""View modules for manual routing.

The app uses a custom router in `app.py` instead of Streamlit's automatic
multi-page system. Every page exposes a `view()` callable; protected pages
are wrapped once with `views.guard.protected` when they are registered in
`PAGE_REGISTRY`, so sign-in and registration gating lives in one place.
"""
