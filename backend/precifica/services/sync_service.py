"""
Sync service — whole-grid pull/push against the remote JSON file.

Pull replaces the local grid with the remote file; push overwrites the
remote file with the local grid. Both are all-or-nothing: the grid and the
stored version token only change after the remote call and the decoding
have fully succeeded. Nothing is retried; on ConflictError the user pulls
again and re-applies their edits before pushing.
"""
import logging
from datetime import datetime, timezone

from precifica.clients.github_client import GithubContentsClient
from precifica.core.constants.sync import COMMIT_MESSAGE_PREFIX
from precifica.core.exceptions import ConfigError
from precifica.db.product_store import ProductStore
from precifica.db.settings_store import SettingsStore
from precifica.schemas.sync import PullResult, PushResult, SyncStatus
from precifica.services.pricing_service import PricingService
from precifica.utils.hash_utils import compute_products_hash
from precifica.utils.remote_document import (
    decode_file_content,
    decode_product_document,
    encode_file_content,
    encode_product_document,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SyncService:
    def __init__(
        self,
        client: GithubContentsClient,
        product_store: ProductStore,
        settings_store: SettingsStore,
        pricing: PricingService,
    ) -> None:
        self._client = client
        self._products = product_store
        self._settings_store = settings_store
        self._pricing = pricing

    def _descriptor(self):
        descriptor = self._settings_store.get_remote_descriptor()
        if not descriptor.is_configured:
            raise ConfigError(
                "GitHub token, owner and repository must be configured before syncing"
            )
        return descriptor

    async def pull(self) -> PullResult:
        """Replace the grid with the remote file and remember its version token."""
        descriptor = self._descriptor()
        remote = await self._client.get_file(descriptor)
        document = decode_product_document(decode_file_content(remote.content))

        count = self._products.replace_all(document.products, self._pricing.context)
        self._settings_store.record_sync(
            remote.sha, compute_products_hash(self._products.to_wire()), _now().isoformat()
        )

        warnings = [str(document.warning)] if document.warning else []
        if document.discarded:
            warnings.append(f"{document.discarded} entries without SKU or name were skipped")
        logger.info(
            "sync pull done path=%s shape=%s count=%s sha=%s",
            descriptor.path, document.shape.value, count, remote.sha,
        )
        return PullResult(count=count, version_token=remote.sha, warnings=warnings)

    async def push(self) -> PushResult:
        """Write the whole grid to the remote file using the last known version token."""
        descriptor = self._descriptor()
        records = self._products.to_wire()
        text = encode_product_document(self._products.all())
        now = _now()
        message = f"{COMMIT_MESSAGE_PREFIX} - {now.strftime('%Y-%m-%d %H:%M:%S')} UTC"

        new_sha = await self._client.put_file(
            descriptor, encode_file_content(text), message, descriptor.version_token
        )

        self._settings_store.record_sync(new_sha, compute_products_hash(records), now.isoformat())
        logger.info("sync push done path=%s count=%s sha=%s", descriptor.path, len(records), new_sha)
        return PushResult(count=len(records), version_token=new_sha, message=message)

    def status(self) -> SyncStatus:
        descriptor = self._settings_store.get_remote_descriptor()
        last = self._settings_store.get_last_sync()
        current_hash = compute_products_hash(self._products.to_wire())
        return SyncStatus(
            configured=descriptor.is_configured,
            remote=descriptor.masked(),
            in_sync=bool(last["hash"]) and last["hash"] == current_hash,
            last_sync_at=last["at"],
        )
