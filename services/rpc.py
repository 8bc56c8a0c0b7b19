"""NEAR JSON-RPC backend.

View calls go straight to the RPC node. State-changing calls need a signed
transaction, which is delegated to a `signer` callable
`(method, args, gas, deposit) -> TransactionReceipt`.
"""
from __future__ import annotations
import base64
import json
import logging
from typing import Any, Callable, Dict, List, Optional
import requests
from domain.models import TransactionReceipt
from services.contract import ContractClient, ContractCallError, LedgerRejection

logger = logging.getLogger(__name__)

Signer = Callable[[str, Dict[str, Any], str, str], TransactionReceipt]


class NearRpcContract(ContractClient):

    def __init__(self, contract_id: str, rpc_url: str, signer: Optional[Signer] = None, timeout: float = 10.0):
        self.contract_id = contract_id
        self.rpc_url = rpc_url
        self.signer = signer
        self.timeout = timeout

    def _rpc(self, params: Dict[str, Any]) -> Dict[str, Any]:
        body = {'jsonrpc': '2.0', 'id': 'deeds', 'method': 'query', 'params': params}
        try:
            resp = requests.post(self.rpc_url, json=body, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.exceptions.Timeout as e:
            raise ContractCallError(f"RPC timeout: {e}") from e
        except requests.exceptions.RequestException as e:
            raise ContractCallError(f"RPC request failed: {e}") from e
        except ValueError as e:
            raise ContractCallError(f"RPC returned invalid JSON: {e}") from e

        if payload.get('error'):
            err = payload['error']
            message = (err.get('data') if isinstance(err, dict) else None) or err
            raise ContractCallError(f"RPC error: {message}")
        result = payload.get('result') or {}
        # contract panics come back as a result with an `error` string
        if result.get('error'):
            raise LedgerRejection(str(result['error']))
        return result

    def _view(self, method: str, args: Optional[Dict[str, Any]] = None) -> Any:
        args_b64 = base64.b64encode(json.dumps(args or {}).encode('utf-8')).decode('ascii')
        result = self._rpc({
            'request_type': 'call_function',
            'finality': 'final',
            'account_id': self.contract_id,
            'method_name': method,
            'args_base64': args_b64,
        })
        raw = bytes(result.get('result') or [])
        try:
            return json.loads(raw.decode('utf-8'))
        except ValueError as e:
            raise ContractCallError(f"Could not decode result of {method}: {e}") from e

    def _change(self, method: str, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        if self.signer is None:
            raise ContractCallError(f"No signer configured for {method}")
        return self.signer(method, args, gas, deposit)

    # --- view methods ---
    def get_deeds_count(self) -> int:
        return int(self._view('get_deeds_count'))

    def social_deeds(self, creditor_id: str, from_index: Any = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        # from_index is a U128 on the contract side and travels as a string
        args: Dict[str, Any] = {'creditor_id': creditor_id, 'from_index': str(from_index)}
        if limit is not None:
            args['limit'] = int(limit)
        return list(self._view('social_deeds', args) or [])

    def storage_balance_bounds(self) -> Dict[str, str]:
        bounds = self._view('storage_balance_bounds') or {}
        return {'min': str(bounds.get('min', '0')), 'max': str(bounds.get('max') or bounds.get('min', '0'))}

    def is_registered(self, account_id: str) -> bool:
        return bool(self._view('is_registered', {'account_id': account_id}))

    def ft_balance_of(self, account_id: str) -> str:
        return str(self._view('ft_balance_of', {'account_id': account_id}))

    def account_balance(self, account_id: str) -> str:
        result = self._rpc({'request_type': 'view_account', 'finality': 'final', 'account_id': account_id})
        return str(result.get('amount', '0'))

    # --- change methods ---
    def add_deed(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        return self._change('add_deed', args, gas, deposit)

    def credit(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        return self._change('credit', args, gas, deposit)

    def donate(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        return self._change('donate', args, gas, deposit)

    def storage_deposit(self, args: Dict[str, Any], gas: str, deposit: str) -> TransactionReceipt:
        return self._change('storage_deposit', args, gas, deposit)
