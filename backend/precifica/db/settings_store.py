"""
Settings store — scalar settings, each under its own key.

Holds the plating factor, the remote file descriptor and the bookkeeping
of the last successful sync. Values saved here win over the environment
defaults in Settings.
"""

import logging
from typing import Any, Dict, Optional

from precifica.core.constants.sync import (
    GITHUB_OWNER_KEY,
    GITHUB_PATH_KEY,
    GITHUB_REPO_KEY,
    GITHUB_SHA_KEY,
    GITHUB_TOKEN_KEY,
    LAST_SYNC_AT_KEY,
    LAST_SYNC_HASH_KEY,
    PLATING_FACTOR_KEY,
)
from precifica.db.base_store import BaseStore
from precifica.schemas.sync import RemoteDescriptor
from precifica.utils.type_converters import to_float

logger = logging.getLogger("settings_store")


class SettingsStore(BaseStore):
    """Key/value settings backed by a single JSON object file."""

    def _load(self) -> Dict[str, Any]:
        data = self._read_json(self._settings.settings_file, {})
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._write_json(self._settings.settings_file, data)

    def set_items(self, values: Dict[str, Any]) -> None:
        data = self._load()
        data.update(values)
        self._write_json(self._settings.settings_file, data)

    # -- Pricing ---------------------------------------------------------------

    def get_plating_factor(self) -> float:
        saved = self.get_item(PLATING_FACTOR_KEY)
        if saved is None or saved == "":
            return self._settings.default_plating_factor
        return to_float(saved)

    def set_plating_factor(self, factor: float) -> None:
        self.set_item(PLATING_FACTOR_KEY, factor)

    # -- Remote descriptor -------------------------------------------------------

    def get_remote_descriptor(self) -> RemoteDescriptor:
        data = self._load()
        return RemoteDescriptor(
            owner=data.get(GITHUB_OWNER_KEY) or self._settings.github_owner,
            repository=data.get(GITHUB_REPO_KEY) or self._settings.github_repo,
            path=data.get(GITHUB_PATH_KEY) or self._settings.github_path,
            token=data.get(GITHUB_TOKEN_KEY) or self._settings.github_token,
            version_token=data.get(GITHUB_SHA_KEY),
        )

    def update_remote_descriptor(
        self,
        owner: Optional[str] = None,
        repository: Optional[str] = None,
        path: Optional[str] = None,
        token: Optional[str] = None,
    ) -> RemoteDescriptor:
        """Save the given descriptor fields; None leaves a field unchanged."""
        changes = {}
        if owner is not None:
            changes[GITHUB_OWNER_KEY] = owner.strip()
        if repository is not None:
            changes[GITHUB_REPO_KEY] = repository.strip()
        if path is not None:
            changes[GITHUB_PATH_KEY] = path.strip()
        if token is not None:
            changes[GITHUB_TOKEN_KEY] = token.strip()

        previous = self.get_remote_descriptor()
        target_moved = any(
            key in changes and changes[key] != current
            for key, current in (
                (GITHUB_OWNER_KEY, previous.owner),
                (GITHUB_REPO_KEY, previous.repository),
                (GITHUB_PATH_KEY, previous.path),
            )
        )
        if target_moved:
            # A token read from another file must never authorize a write here
            changes[GITHUB_SHA_KEY] = None
            changes[LAST_SYNC_HASH_KEY] = None

        if changes:
            self.set_items(changes)
            logger.info(
                "remote descriptor updated fields=%s target_moved=%s",
                sorted(changes), target_moved,
            )
        return self.get_remote_descriptor()

    def set_version_token(self, sha: Optional[str]) -> None:
        self.set_item(GITHUB_SHA_KEY, sha)

    # -- Sync bookkeeping --------------------------------------------------------

    def record_sync(self, sha: Optional[str], content_hash: str, synced_at: str) -> None:
        self.set_items({
            GITHUB_SHA_KEY: sha,
            LAST_SYNC_HASH_KEY: content_hash,
            LAST_SYNC_AT_KEY: synced_at,
        })

    def get_last_sync(self) -> Dict[str, Optional[str]]:
        data = self._load()
        return {
            "hash": data.get(LAST_SYNC_HASH_KEY),
            "at": data.get(LAST_SYNC_AT_KEY),
        }
