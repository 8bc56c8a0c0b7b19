"""Deed feed assembly.

The feed is read in two calls: the total count, then a single page from
index 0 with `limit=count`. The two reads are not atomic. A deed published
in between is simply missing from this page, and a deed removed in between
shows up as a page shorter than `count`. Both are accepted as they are; a
page longer than the requested limit is cut back to the limit.
"""
from __future__ import annotations
import logging
from typing import Optional, Tuple
from domain.constants import FEED_ROW_WIDTH
from domain.models import FeedPage, FeedResult, deed_from_dict
from services.contract import ContractClient, ContractCallError

logger = logging.getLogger(__name__)


class DeedFeedPaginator:

    def __init__(self, contract: ContractClient, row_width: int = FEED_ROW_WIDTH):
        self.contract = contract
        self.row_width = row_width
        self.result: Optional[FeedResult] = None
        self._key: Optional[Tuple[str, int]] = None
        self._generation = 0

    def ensure(self, viewer_id: str) -> FeedResult:
        """Return the cached feed for this viewer and contract, loading it when either changed."""
        if self.result is not None and self._key == (viewer_id, id(self.contract)):
            return self.result
        return self.load(viewer_id)

    def invalidate(self):
        """Drop the current result; an in-flight load will be discarded."""
        self._generation += 1
        self.result = None
        self._key = None

    def load(self, viewer_id: str) -> FeedResult:
        self._generation += 1
        generation = self._generation
        key = (viewer_id, id(self.contract))
        try:
            page = self._fetch(viewer_id)
        except ContractCallError as e:
            if generation != self._generation:
                return FeedResult('stale')
            logger.warning("Feed load failed for %s: %s", viewer_id, e)
            self.result = FeedResult('error', error=str(e))
            self._key = key
            return self.result

        if generation != self._generation:
            logger.debug("Discarding stale feed page for %s", viewer_id)
            return FeedResult('stale')
        self.result = FeedResult('ok', page=page)
        self._key = key
        return self.result

    def _fetch(self, viewer_id: str) -> FeedPage:
        count = int(self.contract.get_deeds_count())
        if count <= 0:
            # the ledger rejects a zero limit, so an empty ledger needs no page call
            return FeedPage(from_index=0, limit=0, count=0, row_width=self.row_width)
        raw = self.contract.social_deeds(creditor_id=viewer_id, from_index=0, limit=count)
        deeds = [deed_from_dict(r) for r in list(raw or [])[:count]]
        if len(deeds) < count:
            logger.info("Short feed page: %d of %d deeds", len(deeds), count)
        return FeedPage(from_index=0, limit=count, count=count, deeds=deeds, row_width=self.row_width)
