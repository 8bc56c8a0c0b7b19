from domain.models import Identity
from services.contract import ContractCallError
from services.navigation import NavigationState
from services.wallet import WalletConnection, is_valid_account_id, AUTH_KEY


def make_wallet(params, storage=None, balance='42'):
    lookups = []

    def lookup(account_id):
        lookups.append(account_id)
        if isinstance(balance, Exception):
            raise balance
        return balance

    wallet = WalletConnection(storage if storage is not None else {}, NavigationState(params), lookup)
    return wallet, lookups


def test_account_id_validation():
    assert is_valid_account_id('alice.testnet')
    assert is_valid_account_id('a_b-c.near')
    assert not is_valid_account_id('A')
    assert not is_valid_account_id('Alice.testnet')
    assert not is_valid_account_id('bad..name')


def test_sign_in_round_trip_strips_url_residue():
    params = {'page': 'home'}
    storage = {}
    wallet, lookups = make_wallet(params, storage)
    assert wallet.request_sign_in('deeds.testnet', ['add_deed'], account_id=' Alice.Testnet ')
    assert params['account_id'] == 'alice.testnet'
    assert wallet.complete_sign_in() == 'alice.testnet'
    assert params == {'page': 'home'}
    assert storage[AUTH_KEY]['method_names'] == ['add_deed']
    assert wallet.account() == Identity('alice.testnet', '42')
    # identity is cached for the session
    wallet.account()
    assert lookups == ['alice.testnet']


def test_invalid_sign_in_redirects_with_error():
    params = {}
    wallet, _ = make_wallet(params)
    assert not wallet.request_sign_in('deeds.testnet', [], failure_page='home', account_id='x')
    assert params['errorCode'] == 'invalidAccountId'
    assert params['page'] == 'home'
    assert wallet.account() is None


def test_balance_failure_is_not_cached():
    params = {'account_id': 'bob.testnet'}
    wallet, lookups = make_wallet(params, balance=ContractCallError('down'))
    wallet.complete_sign_in()
    assert wallet.account() == Identity('bob.testnet', None)
    wallet.account()
    assert lookups == ['bob.testnet', 'bob.testnet']


def test_sign_out_clears_session():
    params = {'account_id': 'bob.testnet'}
    wallet, _ = make_wallet(params)
    wallet.complete_sign_in()
    assert wallet.is_signed_in()
    wallet.sign_out()
    assert not wallet.is_signed_in()
    assert wallet.account() is None
