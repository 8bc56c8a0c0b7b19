"""Local ledger backend persisted as JSON under data/.

Implements the deed contract semantics the client relies on so the app runs
without a network: deed storage, crediting rules, the donation split,
storage registration and DEED balances. Calls are signed by `signer_id`.
"""
from __future__ import annotations
import functools
import logging
import threading
from decimal import Decimal
from typing import Any, Dict, List, Optional
from domain.constants import YOCTO_PER_NEAR, DONATION_TITLE, DONATION_PROOF
from domain.models import TransactionReceipt
from services import persistence
from services.contract import ContractClient, ContractCallError, LedgerRejection
from utils.ids import create_transaction_hash

logger = logging.getLogger(__name__)

TOTAL_SUPPLY = 1_000_000_000_000_000
STARTING_BALANCE = 100 * YOCTO_PER_NEAR
STORAGE_MIN = 1_250_000_000_000_000_000_000  # 0.00125 NEAR
ADD_DEED_STORAGE_COST = 5 * 10 ** 21
CREDIT_STORAGE_COST = 10 ** 21
MIN_DONATION_SHARE = 10 ** 22

# Streamlit serves each browser session from its own thread; every
# load-mutate-write of the JSON files happens under this lock.
_WRITE_LOCK = threading.RLock()


def _serialized(method):
    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        with _WRITE_LOCK:
            return method(*args, **kwargs)
    return wrapper


def _near(amount: int) -> str:
    text = format(Decimal(amount) / YOCTO_PER_NEAR, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


class LocalLedger(ContractClient):

    def __init__(self, contract_id: str, signer_id: Optional[str] = None):
        self.contract_id = contract_id
        self.signer_id = signer_id

    def for_signer(self, signer_id: Optional[str]) -> 'LocalLedger':
        return LocalLedger(self.contract_id, signer_id)

    # --- storage helpers ---
    def _accounts(self) -> List[Dict[str, Any]]:
        return persistence.load_list('accounts')

    def _account(self, accounts: List[Dict[str, Any]], account_id: str) -> Dict[str, Any]:
        rec = next((a for a in accounts if a.get('account_id') == account_id), None)
        if rec is None:
            rec = {'account_id': account_id, 'registered': False,
                   'deed_balance': 0, 'near_balance': str(STARTING_BALANCE)}
            accounts.append(rec)
        return rec

    def _require_signer(self) -> str:
        if not self.signer_id:
            raise ContractCallError("No signer account for a state-changing call")
        return self.signer_id

    def _charge(self, rec: Dict[str, Any], amount: int):
        balance = int(rec.get('near_balance', STARTING_BALANCE))
        if amount > balance:
            raise LedgerRejection(
                f"{rec['account_id']} does not have enough balance to attach {_near(amount)} NEAR",
                code='NotEnoughBalance')
        rec['near_balance'] = str(balance - amount)

    def _receipt(self, method: str, logs: Optional[List[str]] = None) -> TransactionReceipt:
        receipt = TransactionReceipt(
            transaction_id=create_transaction_hash(), method=method,
            signer_id=self.signer_id or '', logs=logs or [])
        logger.info("%s by %s -> %s", method, receipt.signer_id, receipt.transaction_id)
        return receipt

    # --- view methods ---
    def get_deeds_count(self) -> int:
        return len(persistence.load_list('deeds'))

    def social_deeds(self, creditor_id: str, from_index: Any = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        deeds = persistence.load_list('deeds')
        start = int(from_index or 0)
        if len(deeds) <= start:
            raise LedgerRejection("Out of bounds, please use a smaller from_index.")
        if limit is not None and int(limit) == 0:
            raise LedgerRejection("Cannot provide limit of 0.")
        window = deeds[start:] if limit is None else deeds[start:start + int(limit)]
        return [
            {
                'id': d['id'],
                'author': d['author'],
                'title': d['title'],
                'description': d['description'],
                'proof': d['proof'],
                'creditors': len(d.get('creditors', [])),
                'is_creditor': creditor_id in d.get('creditors', []),
            }
            for d in window
        ]

    def storage_balance_bounds(self) -> Dict[str, str]:
        return {'min': str(STORAGE_MIN), 'max': str(STORAGE_MIN)}

    def is_registered(self, account_id: str) -> bool:
        rec = next((a for a in self._accounts() if a.get('account_id') == account_id), None)
        return bool(rec and rec.get('registered'))

    def ft_balance_of(self, account_id: str) -> str:
        accounts = self._accounts()
        if account_id == self.contract_id:
            minted = sum(int(a.get('deed_balance', 0)) for a in accounts)
            return str(TOTAL_SUPPLY - minted)
        rec = next((a for a in accounts if a.get('account_id') == account_id), None)
        return str(int(rec.get('deed_balance', 0))) if rec else '0'

    def account_balance(self, account_id: str) -> str:
        rec = next((a for a in self._accounts() if a.get('account_id') == account_id), None)
        return str(rec.get('near_balance', STARTING_BALANCE)) if rec else str(STARTING_BALANCE)

    # --- change methods ---
    @_serialized
    def add_deed(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        signer = self._require_signer()
        if args.get('author') != signer:
            raise LedgerRejection("The author must be the same as the calling account.")
        if int(deposit) < ADD_DEED_STORAGE_COST:
            raise LedgerRejection(f"Must attach {ADD_DEED_STORAGE_COST} yoctoNEAR to cover storage")
        accounts = self._accounts()
        self._charge(self._account(accounts, signer), ADD_DEED_STORAGE_COST)
        deeds = persistence.load_list('deeds')
        deeds.append({
            'id': len(deeds),
            'author': signer,
            'title': str(args.get('title', '')),
            'description': str(args.get('description', '')),
            'proof': str(args.get('proof', '')),
            'creditors': [],
        })
        persistence.replace_all('deeds', deeds)
        persistence.replace_all('accounts', accounts)
        return self._receipt('add_deed')

    @_serialized
    def credit(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        signer = self._require_signer()
        deeds = persistence.load_list('deeds')
        deed_id = int(args.get('id', -1))
        if not 0 <= deed_id < len(deeds):
            raise LedgerRejection("The id is out of range.")
        deed = deeds[deed_id]
        if deed['author'] == signer:
            raise LedgerRejection("You cannot credit yourself.")
        if signer in deed.get('creditors', []):
            raise LedgerRejection(f"{signer} cannot credit the deed of {deed['author']} again.")
        if int(deposit) < CREDIT_STORAGE_COST:
            raise LedgerRejection(f"Must attach {CREDIT_STORAGE_COST} yoctoNEAR to cover storage")
        accounts = self._accounts()
        author = self._account(accounts, deed['author'])
        if not author.get('registered'):
            raise LedgerRejection(f"The account {deed['author']} is not registered")
        self._charge(self._account(accounts, signer), CREDIT_STORAGE_COST)
        deed.setdefault('creditors', []).append(signer)
        author['deed_balance'] = int(author.get('deed_balance', 0)) + 1
        persistence.replace_all('deeds', deeds)
        persistence.replace_all('accounts', accounts)
        return self._receipt('credit', [f"Social deed of {deed['author']} credited by {signer}"])

    @_serialized
    def donate(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        signer = self._require_signer()
        amount = int(deposit)
        if amount < ADD_DEED_STORAGE_COST:
            raise LedgerRejection(f"Must attach {ADD_DEED_STORAGE_COST} yoctoNEAR to cover storage")
        accounts = self._accounts()
        self._charge(self._account(accounts, signer), amount)

        deeds = persistence.load_list('deeds')
        deeds.append({
            'id': len(deeds),
            'author': signer,
            'title': DONATION_TITLE,
            'description': f"{signer} donated {_near(amount)} NEAR to all users. Thank you very much!",
            'proof': DONATION_PROOF,
            'creditors': [],
        })

        remaining = amount - ADD_DEED_STORAGE_COST
        holders = [a for a in accounts if a['account_id'] != signer and int(a.get('deed_balance', 0)) > 0]
        minted = sum(int(a['deed_balance']) for a in holders)
        logs = []
        for holder in holders:
            share = int(holder['deed_balance']) * remaining // minted
            if share > MIN_DONATION_SHARE:
                holder['near_balance'] = str(int(holder.get('near_balance', STARTING_BALANCE)) + share)
                logs.append(f"Donated {_near(share)} NEAR to {holder['account_id']}.")
        persistence.replace_all('deeds', deeds)
        persistence.replace_all('accounts', accounts)
        return self._receipt('donate', logs)

    @_serialized
    def storage_deposit(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        signer = self._require_signer()
        account_id = args.get('account_id') or signer
        accounts = self._accounts()
        target = self._account(accounts, account_id)
        if target.get('registered'):
            if args.get('registration_only'):
                logger.info("%s already registered, deposit refunded", account_id)
                return self._receipt('storage_deposit', ["The account is already registered, refunding the deposit"])
            raise LedgerRejection("The account is already registered")
        if int(deposit) < STORAGE_MIN:
            raise LedgerRejection("The attached deposit is less than the minimum storage balance")
        self._charge(self._account(accounts, signer), STORAGE_MIN)
        target['registered'] = True
        persistence.replace_all('accounts', accounts)
        return self._receipt('storage_deposit')
