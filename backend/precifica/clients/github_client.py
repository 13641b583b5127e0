"""
GitHub HTTP client — read and write one file through the contents API.

GET  /repos/{owner}/{repo}/contents/{path}  -> {"content": <base64>, "sha": ...}
PUT  /repos/{owner}/{repo}/contents/{path}  <- {"message", "content", "sha"}
                                            -> {"content": {"sha": ...}, ...}

The sha is the version token: a PUT carrying a stale sha is rejected, which
surfaces here as ConflictError.
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from precifica.core.config import Settings
from precifica.core.constants.sync import GITHUB_ACCEPT_HEADER, GITHUB_SERVICE_NAME
from precifica.core.exceptions import ConfigError, ConflictError, ParseError, RemoteError
from precifica.schemas.sync import RemoteDescriptor, RemoteFile

logger = logging.getLogger("github_client")


class GithubContentsClient:
    def __init__(self, settings: Settings) -> None:
        self._api_url = settings.github_api_url.rstrip("/")
        self._timeout = settings.http_timeout_seconds

    @staticmethod
    def _require_config(descriptor: RemoteDescriptor) -> None:
        if not descriptor.is_configured:
            raise ConfigError(
                "GitHub token, owner and repository must be configured before syncing"
            )

    @staticmethod
    def _headers(descriptor: RemoteDescriptor) -> Dict[str, str]:
        return {
            "Authorization": f"token {descriptor.token}",
            "Accept": GITHUB_ACCEPT_HEADER,
            "Content-Type": "application/json",
        }

    def _contents_url(self, descriptor: RemoteDescriptor) -> str:
        path = quote(descriptor.path.lstrip("/"), safe="/")
        return f"{self._api_url}/repos/{descriptor.owner}/{descriptor.repository}/contents/{path}"

    async def _call_github(
        self, method: str, descriptor: RemoteDescriptor, json: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        url = self._contents_url(descriptor)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.request(method, url, headers=self._headers(descriptor), json=json)
        except httpx.HTTPError as exc:
            logger.info("github request failed method=%s path=%s error=%s", method, descriptor.path, exc)
            raise RemoteError(GITHUB_SERVICE_NAME, f"request failed: {exc}") from exc

        if resp.status_code >= 300:
            self._raise_for_status(method, resp)

        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError(f"{GITHUB_SERVICE_NAME} returned a non-JSON body") from exc

    @staticmethod
    def _raise_for_status(method: str, resp: httpx.Response) -> None:
        try:
            message = (resp.json() or {}).get("message") or resp.text
        except ValueError:
            message = resp.text
        message = str(message)[:300]
        logger.info("github error method=%s status=%s detail=%s", method, resp.status_code, message)

        if method == "PUT":
            stale = resp.status_code == 409
            missing_sha = resp.status_code == 422 and "sha" in message.lower()
            if stale or missing_sha:
                raise ConflictError(GITHUB_SERVICE_NAME, message, status_code=resp.status_code)
        raise RemoteError(GITHUB_SERVICE_NAME, message, status_code=resp.status_code)

    async def get_file(self, descriptor: RemoteDescriptor) -> RemoteFile:
        self._require_config(descriptor)
        data = await self._call_github("GET", descriptor)
        if not isinstance(data, dict) or "content" not in data or not data.get("sha"):
            raise ParseError(f"{GITHUB_SERVICE_NAME} response is not a file (missing content/sha)")
        logger.info("github file read path=%s sha=%s", descriptor.path, data["sha"])
        return RemoteFile(content=data["content"] or "", sha=data["sha"])

    async def put_file(
        self, descriptor: RemoteDescriptor, content: str, message: str, sha: Optional[str]
    ) -> str:
        """Create or update the file; returns the new version token."""
        self._require_config(descriptor)
        payload: Dict[str, Any] = {"message": message, "content": content}
        if sha:
            payload["sha"] = sha
        data = await self._call_github("PUT", descriptor, json=payload)

        new_sha = ((data or {}).get("content") or {}).get("sha")
        if not new_sha:
            raise ParseError(f"{GITHUB_SERVICE_NAME} response has no content.sha")
        logger.info("github file written path=%s sha=%s", descriptor.path, new_sha)
        return new_sha
