"""State-changing actions: publish, credit, donate, register.

Each action reports its outcome through the navigation state the way the
wallet redirect does (`transactionHashes` on success, `errorCode` and
`errorMessage` when the ledger rejects the call), so the notifier handles
both paths. Transport failures stay local in the returned `ActionResult`.
"""
from __future__ import annotations
import logging
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional
from urllib.parse import quote
from domain.constants import (
    GAS_BUDGET,
    PUBLISH_DEPOSIT,
    CREDIT_DEPOSIT,
    YOCTO_PER_NEAR,
    DONATION_MIN_NEAR,
    DONATION_MAX_NEAR,
    ELIGIBLE,
    ALREADY_CREDITED,
    TX_HASHES_PARAM,
    ERROR_CODE_PARAM,
    ERROR_MESSAGE_PARAM,
)
from domain.models import ActionResult, Deed, TransactionReceipt
from services.contract import ContractClient, ContractCallError, LedgerRejection
from services.credit import decide
from services.feed import DeedFeedPaginator
from services.navigation import NavigationState
from services.session import SessionController

logger = logging.getLogger(__name__)


class ActionRunner:

    def __init__(self, contract: ContractClient, navigation: NavigationState,
                 session: Optional[SessionController] = None,
                 feed: Optional[DeedFeedPaginator] = None):
        self.contract = contract
        self.navigation = navigation
        self.session = session
        self.feed = feed
        self.pending: Optional[str] = None

    def _run(self, method: str, call: Callable[[], TransactionReceipt]) -> ActionResult:
        if self.pending:
            logger.warning("Refusing %s while %s is in flight", method, self.pending)
            return ActionResult(False, method, error=f"Please wait for {self.pending} to finish.")
        self.pending = method
        try:
            receipt = call()
        except LedgerRejection as e:
            logger.info("%s rejected by the ledger: %s", method, e)
            self.navigation.update(**{ERROR_CODE_PARAM: e.code, ERROR_MESSAGE_PARAM: quote(str(e))})
            return ActionResult(False, method, error=str(e), signalled=True)
        except ContractCallError as e:
            logger.warning("%s failed: %s", method, e)
            return ActionResult(False, method, error=str(e))
        finally:
            self.pending = None
        self.navigation.update(**{TX_HASHES_PARAM: receipt.transaction_id})
        return ActionResult(True, method, transaction_id=receipt.transaction_id, signalled=True)

    def _after_new_deed(self, result: ActionResult) -> ActionResult:
        # publish and donate both append a deed, so the cached page is outdated
        if result.ok and self.feed is not None:
            self.feed.invalidate()
        return result

    def publish(self, author: str, title: str, description: str, proof: str) -> ActionResult:
        fields = {'title': title, 'description': description, 'proof': proof}
        missing = [k for k, v in fields.items() if not (v or '').strip()]
        if missing:
            return ActionResult(False, 'add_deed', error=f"Missing required fields: {', '.join(missing)}")
        args = {'author': author, **{k: v.strip() for k, v in fields.items()}}
        result = self._run('add_deed', lambda: self.contract.add_deed(args, GAS_BUDGET, PUBLISH_DEPOSIT))
        return self._after_new_deed(result)

    def credit(self, deed: Deed, viewer_account_id: str) -> ActionResult:
        decision = decide(deed, viewer_account_id)
        if decision != ELIGIBLE:
            if decision == ALREADY_CREDITED:
                error = f"You already credited deed #{deed.id}"
            else:
                error = "You cannot credit yourself."
            return ActionResult(False, 'credit', error=error)
        # the feed is not refreshed here; the viewer refreshes it manually
        return self._run('credit', lambda: self.contract.credit({'id': deed.id}, GAS_BUDGET, CREDIT_DEPOSIT))

    def donate(self, amount_near) -> ActionResult:
        try:
            amount = Decimal(str(amount_near))
        except InvalidOperation:
            return ActionResult(False, 'donate', error=f"Invalid donation amount: {amount_near}")
        if not DONATION_MIN_NEAR <= amount <= DONATION_MAX_NEAR:
            return ActionResult(False, 'donate',
                                error=f"Donation must be between {DONATION_MIN_NEAR} and {DONATION_MAX_NEAR} NEAR.")
        deposit = str(int(amount * YOCTO_PER_NEAR))
        result = self._run('donate', lambda: self.contract.donate({}, GAS_BUDGET, deposit))
        return self._after_new_deed(result)

    def register(self, account_id: str) -> ActionResult:
        def call():
            bounds = self.contract.storage_balance_bounds()
            return self.contract.storage_deposit(
                {'account_id': account_id, 'registration_only': True},
                GAS_BUDGET, str(bounds['min']))

        result = self._run('storage_deposit', call)
        if result.ok and self.session is not None:
            self.session.refresh()
        return result
