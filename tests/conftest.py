import os
import sys
import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from domain.models import TransactionReceipt  # noqa: E402
from services.contract import ContractClient, ContractCallError  # noqa: E402
from services.navigation import NavigationState  # noqa: E402


def make_deed(i, author='bob', is_creditor=False, creditors=0):
    return {'id': i, 'author': author, 'title': f'deed {i}', 'description': 'did good',
            'proof': f'https://img.example/{i}.gif', 'creditors': creditors, 'is_creditor': is_creditor}


class FakeContract(ContractClient):
    """In-memory contract double recording every call."""

    def __init__(self, deeds=None, count=None, registered=None, fail=None):
        self.contract_id = 'deeds.testnet'
        self.deeds = list(deeds or [])
        self.count = count
        self.registered = dict(registered or {})
        self.fail = dict(fail or {})  # method -> exception to raise
        self.calls = []
        self.hooks = {}  # method -> callable run before returning

    def _enter(self, method, *args):
        self.calls.append((method, args))
        hook = self.hooks.get(method)
        if hook:
            hook()
        if method in self.fail:
            raise self.fail[method]

    def get_deeds_count(self):
        self._enter('get_deeds_count')
        return len(self.deeds) if self.count is None else self.count

    def social_deeds(self, creditor_id, from_index=0, limit=None):
        self._enter('social_deeds', creditor_id, from_index, limit)
        return list(self.deeds)

    def storage_balance_bounds(self):
        self._enter('storage_balance_bounds')
        return {'min': '1250000000000000000000', 'max': '1250000000000000000000'}

    def is_registered(self, account_id):
        self._enter('is_registered', account_id)
        return self.registered.get(account_id, False)

    def ft_balance_of(self, account_id):
        self._enter('ft_balance_of', account_id)
        return '0'

    def account_balance(self, account_id):
        self._enter('account_balance', account_id)
        return '100000000000000000000000000'

    def _change(self, method, args, gas, deposit):
        self._enter(method, args, gas, deposit)
        return TransactionReceipt(transaction_id=f'tx-{method}-{len(self.calls)}', method=method, signer_id='alice.testnet')

    def add_deed(self, args, gas, deposit):
        return self._change('add_deed', args, gas, deposit)

    def credit(self, args, gas, deposit):
        return self._change('credit', args, gas, deposit)

    def donate(self, args, gas, deposit):
        return self._change('donate', args, gas, deposit)

    def storage_deposit(self, args, gas, deposit):
        receipt = self._change('storage_deposit', args, gas, deposit)
        self.registered[args['account_id']] = True
        return receipt


@pytest.fixture
def params():
    return {}


@pytest.fixture
def navigation(params):
    return NavigationState(params)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    d = tmp_path / 'data'
    d.mkdir()
    monkeypatch.setattr('services.persistence.DATA_DIR', str(d))
    return d


__all__ = ['FakeContract', 'make_deed', 'ContractCallError']
