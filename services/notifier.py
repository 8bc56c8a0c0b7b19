"""One-shot user message for the outcome of a wallet-mediated transaction."""
from __future__ import annotations
import logging
from typing import Dict, Optional
from urllib.parse import unquote
from domain.constants import (
    SIGNAL_NONE,
    SIGNAL_SUCCESS,
    SIGNAL_FAILURE,
    SIGNAL_PARAMS,
    TX_HASHES_PARAM,
    ERROR_CODE_PARAM,
    ERROR_MESSAGE_PARAM,
)
from domain.models import TransactionSignal
from services.navigation import NavigationState

logger = logging.getLogger(__name__)


def read_signal(params: Dict[str, Optional[str]]) -> TransactionSignal:
    """Interpret redirect parameters. An error always wins over a transaction id."""
    error = params.get(ERROR_MESSAGE_PARAM) or params.get(ERROR_CODE_PARAM)
    if error:
        return TransactionSignal(SIGNAL_FAILURE, error=error)
    hashes = params.get(TX_HASHES_PARAM)
    if hashes:
        last = [h for h in hashes.split(',') if h.strip()]
        if last:
            return TransactionSignal(SIGNAL_SUCCESS, transaction_id=last[-1].strip())
    return TransactionSignal(SIGNAL_NONE)


def format_message(signal: TransactionSignal) -> Optional[str]:
    if signal.kind == SIGNAL_FAILURE:
        return unquote(signal.error or '')
    if signal.kind == SIGNAL_SUCCESS:
        return f"Successfully executed transaction {signal.transaction_id}"
    return None


class TransactionNotifier:

    def __init__(self, navigation: NavigationState):
        self.navigation = navigation
        self.message: Optional[str] = None
        self.kind: str = SIGNAL_NONE

    def consume(self) -> Optional[str]:
        """Turn a pending redirect signal into the current message.

        The signal is purged from navigation before the message is set, so a
        reload cannot show it twice. Returns the new message or None.
        """
        signal = read_signal(self.navigation.snapshot())
        if signal.kind == SIGNAL_NONE:
            return None
        self.navigation.discard(*SIGNAL_PARAMS)
        self.message = format_message(signal)
        self.kind = signal.kind
        logger.info("Transaction signal consumed: %s", signal.kind)
        return self.message

    def dismiss(self):
        self.message = None
        self.kind = SIGNAL_NONE
