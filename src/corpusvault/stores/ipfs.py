# src/corpusvault/stores/ipfs.py
"""IPFS content store using the Kubo HTTP RPC API."""

from typing import Any

import httpx

from corpusvault.exceptions import StorageError
from corpusvault.stores.base import ContentStore

DEFAULT_IPFS_API_URL = "http://127.0.0.1:5001"


class IPFSContentStore(ContentStore):
    """Content store backed by an IPFS node (``/api/v0/add`` and ``/api/v0/cat``).

    Snapshots are pinned on upload so the node keeps them.

    Example:
        store = IPFSContentStore("http://127.0.0.1:5001")
        cid = await store.aput(b"...")
    """

    def __init__(
        self,
        api_url: str = DEFAULT_IPFS_API_URL,
        timeout: float = 30.0,
        pin: bool = True,
        transport: Any = None,
    ) -> None:
        """Initialize the store.

        Args:
            api_url: Base URL of the node's RPC API
            timeout: Per-request timeout in seconds
            pin: Pin uploaded content on the node
            transport: Optional httpx transport (used by tests)
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.pin = pin
        self._transport = transport

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"base_url": self.api_url, "timeout": self.timeout}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    def _add_params(self) -> dict[str, str]:
        return {"cid-version": "1", "pin": "true" if self.pin else "false"}

    @staticmethod
    def _cid_from(response: httpx.Response) -> str:
        try:
            cid = response.json()["Hash"]
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Unexpected response from IPFS add: {response.text[:200]}") from e
        return str(cid)

    def put(self, data: bytes) -> str:
        try:
            with httpx.Client(**self._client_kwargs()) as client:
                response = client.post(
                    "/api/v0/add", params=self._add_params(), files={"file": data}
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageError(f"IPFS upload failed: {e}") from e
        return self._cid_from(response)

    def get(self, cid: str) -> bytes:
        try:
            with httpx.Client(**self._client_kwargs()) as client:
                response = client.post("/api/v0/cat", params={"arg": cid})
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageError(f"IPFS download of {cid} failed: {e}") from e
        return response.content

    async def aput(self, data: bytes) -> str:
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.post(
                    "/api/v0/add", params=self._add_params(), files={"file": data}
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageError(f"IPFS upload failed: {e}") from e
        return self._cid_from(response)

    async def aget(self, cid: str) -> bytes:
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.post("/api/v0/cat", params={"arg": cid})
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageError(f"IPFS download of {cid} failed: {e}") from e
        return response.content
