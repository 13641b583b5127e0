"""
Sync schemas — remote descriptor and pull/push results.
"""
from typing import List, Optional

from pydantic import BaseModel

from precifica.core.constants.sync import DEFAULT_REMOTE_PATH


class RemoteDescriptor(BaseModel):
    """Connection info for the remote JSON file plus its last known version token."""
    owner: str = ""
    repository: str = ""
    path: str = DEFAULT_REMOTE_PATH
    token: str = ""
    version_token: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.token and self.repository and self.owner)

    def masked(self) -> dict:
        """Descriptor fields safe to show in a UI or a log line."""
        return {
            "owner": self.owner,
            "repository": self.repository,
            "path": self.path,
            "token_set": bool(self.token),
            "version_token": self.version_token,
        }


class RemoteSettingsUpdate(BaseModel):
    owner: Optional[str] = None
    repository: Optional[str] = None
    path: Optional[str] = None
    token: Optional[str] = None


class RemoteFile(BaseModel):
    content: str
    sha: str


class PullResult(BaseModel):
    count: int
    version_token: Optional[str] = None
    warnings: List[str] = []


class PushResult(BaseModel):
    count: int
    version_token: Optional[str] = None
    message: str


class SyncStatus(BaseModel):
    configured: bool
    remote: dict
    in_sync: bool
    last_sync_at: Optional[str] = None
