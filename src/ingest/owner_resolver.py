"""Owner find-or-create resolution.

Owners are keyed by email. The first profile seen for an email wins;
later lines and later runs reuse that owner without updating it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from core.credentials import build_password_hash
from core.types import OwnerIdentity, OwnerProfile


class OwnerStore(Protocol):
    """Store capability required for owner resolution."""

    def find_or_create_owner(
        self,
        profile: OwnerProfile,
        password_hash: str,
    ) -> tuple[OwnerIdentity, bool]:
        """Return the owner for the profile email, creating it when absent."""


@dataclass(frozen=True)
class OwnerResolution:
    """Resolved owner and whether it was newly created."""

    identity: OwnerIdentity
    created: bool


class OwnerResolver:
    """Find-or-create resolver for listing owners."""

    def __init__(self, store: OwnerStore, logger: Any) -> None:
        self._store = store
        self._logger = logger

    def resolve_owner(
        self,
        profile: OwnerProfile,
        salt: str,
        placeholder_password: str,
    ) -> OwnerResolution:
        """Resolve an owner by email, creating it with a placeholder credential.

        Args:
            profile: Owner profile from the parsed line.
            salt: Key for hashing the placeholder password.
            placeholder_password: Password assigned to new owners.

        Returns:
            Owner resolution result.

        Raises:
            RentloadStoreError: If the store lookup or insert fails.
        """
        password_hash = build_password_hash(placeholder_password, salt)
        identity, created = self._store.find_or_create_owner(profile, password_hash)
        self._logger.debug(
            "owner_created" if created else "owner_reused",
            owner_id=identity.owner_id,
            email=identity.email,
        )
        return OwnerResolution(identity=identity, created=created)
