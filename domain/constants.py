"""
This module contains centralized constants used throughout the application,
ensuring a single source of truth for ledger amounts, status names and
the runtime configuration.
"""

import os
import json
from decimal import Decimal
from utils.paths import resolve_data_file

# Ledger call budgets. Amounts are in yoctoNEAR (10^24 per NEAR).
YOCTO_PER_NEAR = 10 ** 24
GAS_BUDGET = str(3 * 10 ** 13)
PUBLISH_DEPOSIT = str(int(Decimal('0.01') * YOCTO_PER_NEAR))
CREDIT_DEPOSIT = str(int(Decimal('0.002') * YOCTO_PER_NEAR))
DONATION_MIN_NEAR = 1
DONATION_MAX_NEAR = 100

# Methods the wallet grants the app a function-call key for
SIGN_IN_METHODS = ["add_deed", "credit", "donate"]

# Session statuses (exactly one holds at a time)
SESSION_UNAUTHENTICATED = 'unauthenticated'
SESSION_LOADING = 'loading'
SESSION_CHECK_FAILED = 'check_failed'
SESSION_UNREGISTERED = 'unregistered'
SESSION_REGISTERED = 'registered'

# Credit decisions
ALREADY_CREDITED = 'already_credited'
SELF_AUTHORED = 'self_authored'
ELIGIBLE = 'eligible'

CREDIT_TOOLTIPS = {
    ALREADY_CREDITED: "You already credited the author.",
    SELF_AUTHORED: "You cannot credit yourself.",
    ELIGIBLE: "Give a credit to the deed author.",
}

# Transaction signal kinds
SIGNAL_NONE = 'none'
SIGNAL_SUCCESS = 'success'
SIGNAL_FAILURE = 'failure'

# Query parameters written by the wallet redirect
TX_HASHES_PARAM = 'transactionHashes'
ERROR_CODE_PARAM = 'errorCode'
ERROR_MESSAGE_PARAM = 'errorMessage'
SIGNAL_PARAMS = (ERROR_CODE_PARAM, ERROR_MESSAGE_PARAM, TX_HASHES_PARAM)
SIGN_IN_PARAMS = ('account_id', 'public_key', 'all_keys')

FEED_ROW_WIDTH = 2

DONATION_TITLE = "Donation to all users"
DONATION_PROOF = "https://gifimage.net/wp-content/uploads/2017/10/donation-gif-10.gif"

_DEFAULT_CONFIG = {
    'app_title': 'Social Bounty Hunt',
    'contract_name': 'social-bounty-hunt.testnet',
    'network': 'testnet',
    'backend': 'local',
    'rpc_url': 'https://rpc.testnet.near.org',
    'log_level': 'INFO',
}

# Environment variable -> config key
_ENV_OVERRIDES = {
    'DEEDS_BACKEND': 'backend',
    'DEEDS_CONTRACT': 'contract_name',
    'DEEDS_RPC_URL': 'rpc_url',
    'DEEDS_LOG_LEVEL': 'log_level',
}


def _load_json(path: str):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, ValueError):
        return None


def get_app_config() -> dict:
    """Return the runtime config: defaults < data/app_config.json < environment."""
    config = dict(_DEFAULT_CONFIG)
    path = resolve_data_file('app_config.json')
    loaded = _load_json(path) if path else None
    if isinstance(loaded, dict):
        config.update({k: v for k, v in loaded.items() if k in _DEFAULT_CONFIG})
    for env_key, key in _ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value:
            config[key] = value
    return config
