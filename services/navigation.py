"""Retained navigation state (the page URL's query parameters).

Both the session controller (sign-out residue) and the transaction notifier
(redirect signals) write here, so every write touches only the named keys
of the currently retained mapping.
"""
from typing import Dict, MutableMapping, Optional


class NavigationState:

    def __init__(self, params: MutableMapping[str, str]):
        self._params = params

    def get(self, key: str) -> Optional[str]:
        value = self._params.get(key)
        if isinstance(value, list):  # multi-valued params: keep the last
            value = value[-1] if value else None
        return value

    def snapshot(self) -> Dict[str, str]:
        return {k: self.get(k) for k in list(self._params.keys())}

    def update(self, **values: str):
        for key, value in values.items():
            self._params[key] = value

    def discard(self, *keys: str) -> Dict[str, str]:
        """Remove the given keys; return what was removed."""
        removed = {}
        for key in keys:
            if key in self._params:
                removed[key] = self.get(key)
                del self._params[key]
        return removed
