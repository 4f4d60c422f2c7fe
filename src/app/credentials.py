"""Read-only access to the bearer credential."""

from __future__ import annotations

import os
from typing import Mapping, MutableMapping, Protocol

CREDENTIAL_KEY = "firebaseIdToken"


class CredentialStore(Protocol):
    def get(self, key: str) -> str | None: ...


class ReadOnlyCredentials:
    """Expose only `get` over a mapping (e.g. st.session_state)."""

    def __init__(self, mapping: Mapping) -> None:
        self._mapping = mapping

    def get(self, key: str) -> str | None:
        val = self._mapping.get(key)
        if val is None:
            return None
        token = str(val).strip()
        return token or None


def seed_credential_from_env(state: MutableMapping, env: Mapping | None = None) -> bool:
    """Copy STUDY_ID_TOKEN into the session once, for local development."""
    env = os.environ if env is None else env
    if state.get(CREDENTIAL_KEY):
        return False
    token = (env.get("STUDY_ID_TOKEN") or "").strip()
    if not token:
        return False
    state[CREDENTIAL_KEY] = token
    return True
