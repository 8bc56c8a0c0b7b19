"""
Reusable UI components for the Streamlit application.

- `base`: CSS injection, badges, amount formatting and the deeds table.
- `cards`: the deed card with its credit action and the transaction message banner.

Import from here (`from ui.components import deed_card`) rather than the submodules.
"""

from .base import (
    inject_base_css,
    creditors_badge,
    format_near,
    deeds_table,
)

from .cards import (
    deed_card,
    message_banner,
    proof_image_html,
)
