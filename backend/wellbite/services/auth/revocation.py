# wellbite/services/auth/revocation.py
from __future__ import annotations

import logging

from wellbite.services._shared.ports import RefreshTokenStore

log = logging.getLogger(__name__)


class RevocationService:
    """Mark refresh tokens revoked. Revoking twice is harmless."""

    def __init__(self, *, store: RefreshTokenStore) -> None:
        self.store = store

    def revoke(self, value: str) -> None:
        """
        Revoke the refresh token with ``value``.

        :raises TokenNotFoundError: If no such token exists.
        """
        self.store.mark_revoked(value)
        log.info("Refresh token revoked")
