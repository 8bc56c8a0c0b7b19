"""Wallet connection helpers: sign-in through the navigation redirect, identity, sign-out.

Sign-in mirrors the hosted wallet flow: the wallet appends `account_id` to
the redirect URL, the app picks it up on the next run, stores it in session
storage and strips it from the URL.
"""
from __future__ import annotations
import logging
import re
from typing import Any, Callable, List, MutableMapping, Optional
from urllib.parse import quote
from domain.constants import SIGN_IN_PARAMS, ERROR_CODE_PARAM, ERROR_MESSAGE_PARAM
from domain.models import Identity
from services.contract import ContractCallError
from services.navigation import NavigationState

logger = logging.getLogger(__name__)

AUTH_KEY = 'wallet_auth_key'
PENDING_KEY = 'wallet_pending_sign_in'
IDENTITY_KEY = 'wallet_identity'

_ACCOUNT_ID_RE = re.compile(r'^(([a-z\d]+[-_])*[a-z\d]+\.)*([a-z\d]+[-_])*[a-z\d]+$')


def is_valid_account_id(account_id: str) -> bool:
    return 2 <= len(account_id or '') <= 64 and bool(_ACCOUNT_ID_RE.match(account_id))


class WalletConnection:

    def __init__(self, storage: MutableMapping[str, Any], navigation: NavigationState,
                 balance_lookup: Callable[[str], str]):
        self.storage = storage
        self.navigation = navigation
        self.balance_lookup = balance_lookup

    def request_sign_in(self, contract_id: str, method_names: List[str],
                        success_page: Optional[str] = None, failure_page: Optional[str] = None,
                        account_id: str = '') -> bool:
        account_id = (account_id or '').strip().lower()
        if not is_valid_account_id(account_id):
            self.navigation.update(**{
                ERROR_CODE_PARAM: 'invalidAccountId',
                ERROR_MESSAGE_PARAM: quote(f"Invalid account id: {account_id or '(empty)'}"),
            })
            if failure_page:
                self.navigation.update(page=failure_page)
            return False
        self.storage[PENDING_KEY] = {'contract_id': contract_id, 'method_names': list(method_names)}
        self.navigation.update(account_id=account_id)
        if success_page:
            self.navigation.update(page=success_page)
        return True

    def complete_sign_in(self) -> Optional[str]:
        """Move a redirect-carried account id into session storage."""
        account_id = self.navigation.get('account_id')
        if not account_id:
            return None
        pending = self.storage.pop(PENDING_KEY, None) or {}
        self.navigation.discard(*SIGN_IN_PARAMS)
        if not is_valid_account_id(account_id):
            logger.warning("Ignoring invalid account id in redirect: %r", account_id)
            return None
        self.storage[AUTH_KEY] = {'account_id': account_id, **pending}
        self.storage.pop(IDENTITY_KEY, None)
        logger.info("Signed in as %s", account_id)
        return account_id

    def is_signed_in(self) -> bool:
        return bool(self.storage.get(AUTH_KEY))

    def account(self) -> Optional[Identity]:
        auth = self.storage.get(AUTH_KEY)
        if not auth:
            return None
        cached = self.storage.get(IDENTITY_KEY)
        if isinstance(cached, Identity) and cached.account_id == auth['account_id']:
            return cached
        try:
            balance = str(self.balance_lookup(auth['account_id']))
        except ContractCallError as e:
            logger.warning("Balance lookup failed for %s: %s", auth['account_id'], e)
            return Identity(auth['account_id'], None)
        identity = Identity(auth['account_id'], balance)
        self.storage[IDENTITY_KEY] = identity
        return identity

    def sign_out(self):
        for key in (AUTH_KEY, PENDING_KEY, IDENTITY_KEY):
            self.storage.pop(key, None)
