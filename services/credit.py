from typing import Tuple
from domain.constants import ALREADY_CREDITED, SELF_AUTHORED, ELIGIBLE, CREDIT_TOOLTIPS
from domain.models import Deed


def decide(deed: Deed, viewer_account_id: str) -> str:
    # already-credited wins over self-authored
    if deed.is_creditor:
        return ALREADY_CREDITED
    if deed.author == viewer_account_id:
        return SELF_AUTHORED
    return ELIGIBLE


def affordance(decision: str) -> Tuple[bool, str]:
    """(enabled, tooltip) for the credit button."""
    return decision == ELIGIBLE, CREDIT_TOOLTIPS[decision]
