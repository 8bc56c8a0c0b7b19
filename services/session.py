"""Session controller: derives the view-gating state from the wallet identity
and the ledger's registration flag.
"""
from __future__ import annotations
import logging
from typing import Optional
from domain.constants import (
    SESSION_UNAUTHENTICATED,
    SESSION_LOADING,
    SESSION_CHECK_FAILED,
    SESSION_UNREGISTERED,
    SESSION_REGISTERED,
    SIGN_IN_PARAMS,
)
from domain.models import Identity, SessionState
from services.contract import ContractClient, ContractCallError
from services.navigation import NavigationState

logger = logging.getLogger(__name__)


class SessionController:

    def __init__(self, contract: ContractClient, navigation: NavigationState):
        self.contract = contract
        self.navigation = navigation
        self.state = SessionState()
        self._identity: Optional[Identity] = None
        self._generation = 0

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    def resolve(self, identity: Optional[Identity]) -> SessionState:
        """Evaluate the state for `identity`; a resolved state for the same account is reused."""
        if identity is None:
            if self._identity is not None:
                self._reset()
            return self.state
        same_account = self._identity is not None and self._identity.account_id == identity.account_id
        # a failed check is kept until the caller asks for refresh()
        if same_account and self.state.status != SESSION_LOADING:
            return self.state
        self._identity = identity
        return self._check()

    def refresh(self) -> SessionState:
        """Re-check registration for the current identity (after a register action)."""
        if self._identity is None:
            return self.state
        return self._check()

    def sign_out(self, wallet) -> SessionState:
        wallet.sign_out()
        self._reset()
        self.navigation.discard(*SIGN_IN_PARAMS)
        return self.state

    def _reset(self):
        self._generation += 1
        self._identity = None
        self.state = SessionState(SESSION_UNAUTHENTICATED)

    def _check(self) -> SessionState:
        self._generation += 1
        generation = self._generation
        identity = self._identity
        self.state = SessionState(SESSION_LOADING, identity)
        try:
            registered = bool(self.contract.is_registered(identity.account_id))
        except ContractCallError as e:
            if generation != self._generation:
                logger.debug("Discarding stale registration failure for %s", identity.account_id)
                return self.state
            logger.warning("Registration check failed for %s: %s", identity.account_id, e)
            self.state = SessionState(SESSION_CHECK_FAILED, identity, error=str(e))
            return self.state

        if generation != self._generation:
            logger.debug("Discarding stale registration result for %s", identity.account_id)
            return self.state
        status = SESSION_REGISTERED if registered else SESSION_UNREGISTERED
        self.state = SessionState(status, identity)
        return self.state
