"""Ledger contract interface consumed by the client.

Every method may fail. Transport or service problems raise `ContractCallError`;
a call the ledger refused to execute raises `LedgerRejection`, which the
action layer reports the same way the wallet reports a rejected transaction.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from domain.models import TransactionReceipt


class ContractCallError(Exception):
    """A remote call could not be completed."""


class LedgerRejection(ContractCallError):
    """The ledger executed the call and rejected it."""

    def __init__(self, message: str, code: str = 'ExecutionError'):
        super().__init__(message)
        self.code = code


class ContractClient(ABC):
    contract_id: str = ''

    # --- view methods ---
    @abstractmethod
    def get_deeds_count(self) -> int:
        ...

    @abstractmethod
    def social_deeds(self, creditor_id: str, from_index: Any = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def storage_balance_bounds(self) -> Dict[str, str]:
        ...

    @abstractmethod
    def is_registered(self, account_id: str) -> bool:
        ...

    @abstractmethod
    def ft_balance_of(self, account_id: str) -> str:
        ...

    @abstractmethod
    def account_balance(self, account_id: str) -> str:
        """NEAR balance of an account in yoctoNEAR."""

    # --- change methods: (args, gas, attached deposit) ---
    @abstractmethod
    def add_deed(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        ...

    @abstractmethod
    def credit(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        ...

    @abstractmethod
    def donate(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        ...

    @abstractmethod
    def storage_deposit(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        ...
