import streamlit as st
from typing import Iterable, Optional
from domain.constants import YOCTO_PER_NEAR
from domain.models import Deed

PRIMARY_ACCENT = "#2563EB"  # blue-600
GREEN = "#059669"  # emerald-600
YELLOW = "#D97706"  # amber-600
RED = "#DC2626"  # red-600
CHIP_BG = "#374151"


def inject_base_css():
    if getattr(inject_base_css, "_applied", False):
        return
    inject_base_css._applied = True
    st.markdown(
        f"""
        <style>
        .badge {{
            display:inline-block; padding:2px 8px; border-radius:12px;
            font-size:12px; line-height:16px; font-weight:600;
            background:{CHIP_BG}; color:#F9FAFB; margin-right:4px; margin-bottom:4px;
        }}
        .badge.green {{background:{GREEN};}}
        .badge.yellow {{background:{YELLOW};}}
        .badge.red {{background:{RED};}}
        .deed-proof img {{max-height:220px; object-fit:cover; border-radius:8px;}}
        .creditors {{font-size:1.4rem; font-weight:700; color:{PRIMARY_ACCENT};}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def creditors_badge(creditors: int) -> str:
    cls = "green" if creditors > 0 else "yellow"
    return f'<span class="badge {cls}">{creditors} credits</span>'


def format_near(yocto: Optional[str], digits: int = 4) -> str:
    try:
        amount = int(yocto) / YOCTO_PER_NEAR
    except (TypeError, ValueError):
        return "—"
    return f"{amount:,.{digits}f} Ⓝ"


def deeds_table(deeds: Iterable[Deed]):
    """Tabular listing of deeds (id, title, credits)."""
    rows = [{"#": d.id, "Title": d.title, "Credits": d.creditors} for d in deeds]
    if not rows:
        st.caption("No deeds to show yet.")
        return
    import pandas as _pd
    df = _pd.DataFrame(rows)
    st.dataframe(df, hide_index=True, use_container_width=True)
