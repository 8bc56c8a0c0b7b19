import base64
import json
import pytest
import requests
from services.contract import ContractCallError, LedgerRejection
from services.rpc import NearRpcContract


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.exceptions.HTTPError(f"{self.status}")

    def json(self):
        return self.payload


def result_of(value):
    return {'jsonrpc': '2.0', 'id': 'deeds', 'result': {'result': list(json.dumps(value).encode('utf-8'))}}


def test_view_call_encodes_args_and_decodes_result(monkeypatch):
    sent = []

    def fake_post(url, json=None, timeout=None):
        sent.append((url, json))
        return FakeResponse(result_of([{'id': 0, 'author': 'bob.testnet'}]))

    monkeypatch.setattr(requests, 'post', fake_post)
    client = NearRpcContract('deeds.testnet', 'https://rpc.example')
    deeds = client.social_deeds('alice.testnet', 0, 3)
    assert deeds == [{'id': 0, 'author': 'bob.testnet'}]
    url, body = sent[0]
    assert url == 'https://rpc.example'
    params = body['params']
    assert params['method_name'] == 'social_deeds'
    assert params['account_id'] == 'deeds.testnet'
    assert json.loads(base64.b64decode(params['args_base64'])) == {
        'creditor_id': 'alice.testnet', 'from_index': '0', 'limit': 3}


def test_transport_error_is_contract_call_error(monkeypatch):
    def fake_post(url, json=None, timeout=None):
        raise requests.exceptions.ConnectionError('refused')

    monkeypatch.setattr(requests, 'post', fake_post)
    with pytest.raises(ContractCallError):
        NearRpcContract('deeds.testnet', 'https://rpc.example').get_deeds_count()


def test_contract_panic_is_rejection(monkeypatch):
    monkeypatch.setattr(requests, 'post', lambda url, json=None, timeout=None: FakeResponse(
        {'result': {'error': 'Out of bounds, please use a smaller from_index.'}}))
    with pytest.raises(LedgerRejection):
        NearRpcContract('deeds.testnet', 'https://rpc.example').social_deeds('a.testnet', 5, 1)


def test_change_calls_need_a_signer():
    with pytest.raises(ContractCallError):
        NearRpcContract('deeds.testnet', 'https://rpc.example').credit({'id': 1}, '1', '1')


def test_view_account_balance(monkeypatch):
    monkeypatch.setattr(requests, 'post', lambda url, json=None, timeout=None: FakeResponse(
        {'result': {'amount': '5000'}}))
    assert NearRpcContract('deeds.testnet', 'https://rpc.example').account_balance('a.testnet') == '5000'
