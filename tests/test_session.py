from conftest import FakeContract
from domain.constants import (
    SESSION_UNAUTHENTICATED,
    SESSION_REGISTERED,
    SESSION_UNREGISTERED,
    SESSION_CHECK_FAILED,
)
from domain.models import Identity
from services.contract import ContractCallError
from services.navigation import NavigationState
from services.session import SessionController

ALICE = Identity('alice.testnet', '1')


class StubWallet:
    def __init__(self):
        self.signed_out = False

    def sign_out(self):
        self.signed_out = True


def test_no_identity_is_unauthenticated():
    ctrl = SessionController(FakeContract(), NavigationState({}))
    assert ctrl.resolve(None).status == SESSION_UNAUTHENTICATED


def test_registered_and_unregistered():
    contract = FakeContract(registered={'alice.testnet': True})
    assert SessionController(contract, NavigationState({})).resolve(ALICE).status == SESSION_REGISTERED
    contract = FakeContract(registered={'alice.testnet': False})
    state = SessionController(contract, NavigationState({})).resolve(ALICE)
    assert state.status == SESSION_UNREGISTERED
    assert state.identity == ALICE


def test_check_failure_is_distinct_state():
    contract = FakeContract(fail={'is_registered': ContractCallError('rpc down')})
    state = SessionController(contract, NavigationState({})).resolve(ALICE)
    assert state.status == SESSION_CHECK_FAILED
    assert 'rpc down' in state.error


def test_same_identity_is_not_rechecked_until_refresh():
    contract = FakeContract()
    ctrl = SessionController(contract, NavigationState({}))
    ctrl.resolve(ALICE)
    ctrl.resolve(Identity('alice.testnet', '2'))
    assert [c[0] for c in contract.calls] == ['is_registered']
    contract.registered['alice.testnet'] = True
    assert ctrl.refresh().status == SESSION_REGISTERED


def test_identity_change_reevaluates():
    contract = FakeContract(registered={'bob.testnet': True})
    ctrl = SessionController(contract, NavigationState({}))
    assert ctrl.resolve(ALICE).status == SESSION_UNREGISTERED
    assert ctrl.resolve(Identity('bob.testnet', '1')).status == SESSION_REGISTERED


def test_late_result_after_sign_out_is_discarded():
    contract = FakeContract(registered={'alice.testnet': True})
    params = {}
    ctrl = SessionController(contract, NavigationState(params))
    contract.hooks['is_registered'] = lambda: ctrl.sign_out(StubWallet())
    ctrl.resolve(ALICE)
    assert ctrl.state.status == SESSION_UNAUTHENTICATED
    assert ctrl.identity is None


def test_sign_out_resets_and_strips_url_residue():
    params = {'account_id': 'alice.testnet', 'all_keys': 'ed25519:x', 'page': 'overview'}
    contract = FakeContract(registered={'alice.testnet': True})
    ctrl = SessionController(contract, NavigationState(params))
    ctrl.resolve(ALICE)
    wallet = StubWallet()
    assert ctrl.sign_out(wallet).status == SESSION_UNAUTHENTICATED
    assert wallet.signed_out
    assert params == {'page': 'overview'}


def test_failed_check_is_kept_until_refresh():
    contract = FakeContract(fail={'is_registered': ContractCallError('rpc down')})
    ctrl = SessionController(contract, NavigationState({}))
    ctrl.resolve(ALICE)
    ctrl.resolve(ALICE)
    assert len(contract.calls) == 1
    del contract.fail['is_registered']
    assert ctrl.refresh().status == SESSION_UNREGISTERED
