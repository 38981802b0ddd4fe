"""Session invalidation after an authorization failure.

``SessionInvalidator`` is the one place that mutates credential state in
response to a 401: it clears the client's default token, removes the
stored credential and then notifies listeners (e.g. the app's auth layer,
which decides whether to route back to login).
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from homekrew_api.storage.credential_store import CredentialStore

logger = logging.getLogger(__name__)

SessionListener = Callable[[], Awaitable[None]]


class SessionInvalidator:
    """Clears credential state and fans out a "session invalidated" signal.

    Parameters
    ----------
    store:
        The credential store whose token is removed.
    clear_default_token:
        Callback that drops the client's in-memory default token.
    """

    def __init__(
        self,
        store: CredentialStore,
        clear_default_token: Callable[[], None],
    ) -> None:
        self._store = store
        self._clear_default_token = clear_default_token
        self._listeners: list[SessionListener] = []

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def invalidate(self) -> None:
        """Drop the default token and the stored credential, then notify."""
        self._clear_default_token()
        await self._store.remove()
        logger.info("Session invalidated after authorization failure")

        for listener in list(self._listeners):
            try:
                await listener()
            except Exception:
                logger.exception("Session listener %r failed", listener)
