from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Iterator
from domain.constants import (
    FEED_ROW_WIDTH,
    SESSION_UNAUTHENTICATED,
    SIGNAL_NONE,
)


@dataclass(frozen=True)
class Identity:
    account_id: str
    balance: Optional[str]  # yoctoNEAR as a decimal string; None when unknown


@dataclass
class Deed:
    id: int
    author: str
    title: str
    description: str
    proof: str
    creditors: int = 0
    is_creditor: bool = False  # relative to the viewer that requested the page


def deed_from_dict(d: Dict[str, Any]) -> Deed:
    """Safe conversion of a ledger record, dropping unknown keys."""
    allowed = {"id", "author", "title", "description",
               "proof", "creditors", "is_creditor"}
    filtered = {k: v for k, v in d.items() if k in allowed}
    filtered['id'] = int(filtered.get('id', 0))
    filtered['creditors'] = int(filtered.get('creditors', 0))
    filtered['is_creditor'] = bool(filtered.get('is_creditor', False))
    for key in ('author', 'title', 'description', 'proof'):
        filtered[key] = str(filtered.get(key) or '')
    return Deed(**filtered)


@dataclass(frozen=True)
class SessionState:
    status: str = SESSION_UNAUTHENTICATED
    identity: Optional[Identity] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class TransactionSignal:
    kind: str = SIGNAL_NONE  # none | success | failure
    transaction_id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class TransactionReceipt:
    transaction_id: str
    method: str
    signer_id: str
    logs: List[str] = field(default_factory=list)


def chunk(items: List[Any], width: int = FEED_ROW_WIDTH) -> List[List[Any]]:
    """Split items into consecutive rows of `width`; the last row may be shorter."""
    if width < 1:
        raise ValueError("width must be positive")
    return [items[i:i + width] for i in range(0, len(items), width)]


@dataclass
class FeedPage:
    from_index: int
    limit: int
    count: int  # total reported by the ledger before the page was read
    deeds: List[Deed] = field(default_factory=list)
    row_width: int = FEED_ROW_WIDTH

    def rows(self) -> Iterator[List[Deed]]:
        yield from chunk(self.deeds, self.row_width)

    def __iter__(self):
        return self.rows()


@dataclass
class FeedResult:
    status: str  # ok | error | stale
    page: Optional[FeedPage] = None
    error: Optional[str] = None


@dataclass
class ActionResult:
    ok: bool
    method: str
    transaction_id: Optional[str] = None
    error: Optional[str] = None
    signalled: bool = False  # outcome was written to navigation for the notifier
