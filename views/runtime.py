"""Per-session wiring of the ledger client, wallet and controllers.

Objects live in `st.session_state` so they survive Streamlit reruns. The
contract handle is rebuilt only when the signed-in account changes, which
is also what invalidates the feed cache; publish and donate invalidate it
too.
"""
from dataclasses import dataclass
from typing import Optional
import streamlit as st
from domain.constants import get_app_config
from services.actions import ActionRunner
from services.contract import ContractClient
from services.feed import DeedFeedPaginator
from services.ledger import LocalLedger
from services.navigation import NavigationState
from services.notifier import TransactionNotifier
from services.rpc import NearRpcContract
from services.session import SessionController
from services.wallet import WalletConnection, AUTH_KEY


@dataclass
class AppRuntime:
    config: dict
    navigation: NavigationState
    contract: ContractClient
    wallet: WalletConnection
    session: SessionController
    notifier: TransactionNotifier
    feed: DeedFeedPaginator
    actions: ActionRunner
    signer_id: Optional[str] = None


def build_contract(config: dict, signer_id: Optional[str]) -> ContractClient:
    if config.get('backend') == 'rpc':
        return NearRpcContract(config['contract_name'], config['rpc_url'])
    return LocalLedger(config['contract_name'], signer_id)


def get_runtime() -> AppRuntime:
    ss = st.session_state
    navigation = NavigationState(st.query_params)
    rt: Optional[AppRuntime] = ss.get('runtime')
    if rt is None:
        config = get_app_config()
        contract = build_contract(config, None)
        session = SessionController(contract, navigation)
        rt = AppRuntime(
            config=config,
            navigation=navigation,
            contract=contract,
            wallet=WalletConnection(ss, navigation, lambda account_id: rt.contract.account_balance(account_id)),
            session=session,
            notifier=TransactionNotifier(navigation),
            feed=DeedFeedPaginator(contract),
            actions=ActionRunner(contract, navigation, session),
        )
        rt.actions.feed = rt.feed
        ss['runtime'] = rt
    rt.navigation = navigation
    for holder in (rt.wallet, rt.session, rt.notifier, rt.actions):
        holder.navigation = navigation

    auth = ss.get(AUTH_KEY) or {}
    signer_id = auth.get('account_id')
    if signer_id != rt.signer_id:
        rebind(rt, build_contract(rt.config, signer_id), signer_id)
    return rt


def rebind(rt: AppRuntime, contract: ContractClient, signer_id: Optional[str]):
    rt.contract = contract
    rt.signer_id = signer_id
    rt.session.contract = contract
    rt.actions.contract = contract
    rt.feed = DeedFeedPaginator(contract)
    rt.actions.feed = rt.feed
