"""
Internal GraphQL client for the Shirokuma SDK.

This module provides the low-level HTTP communication layer.
It is internal to the SDK and should not be used directly by users.

Users should use Session instead, which provides a clean Python API.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
import pydantic

from .errors import TransportError
from .types import EntryArgs

logger = logging.getLogger(__name__)

# GraphQL query to retrieve next entry arguments from a node
GQL_NEXT_ARGS = """
  query NextArgs($publicKey: String!, $viewId: String) {
    nextArgs(publicKey: $publicKey, viewId: $viewId) {
      logId
      seqNum
      backlink
      skiplink
    }
  }
"""

# GraphQL mutation to publish an entry and retrieve arguments for encoding
# the next operation on the same document
GQL_PUBLISH = """
  mutation Publish($entry: String!, $operation: String!) {
    publish(entry: $entry, operation: $operation) {
      logId
      seqNum
      backlink
      skiplink
    }
  }
"""


class GraphQLClient:
    """Internal GraphQL client for a p2panda-style node.

    This class handles all HTTP communication with the node. It manages
    the httpx client lifecycle and provides async methods for the
    `nextArgs` query and the `publish` mutation.

    This is an internal class - users should use Session instead.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the GraphQL client.

        Args:
            endpoint: Full URL of the GraphQL endpoint
            timeout: Request timeout in seconds
            headers: Extra HTTP headers sent with every request
            transport: Optional httpx transport (used by tests)
        """
        self._endpoint = endpoint
        self._timeout = timeout
        self._headers = headers or {}
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def is_connected(self) -> bool:
        return self._http is not None

    async def connect(self) -> httpx.AsyncClient:
        """Create the underlying HTTP client if needed and return it."""
        if self._http is not None:
            return self._http

        self._http = httpx.AsyncClient(
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
        )
        logger.debug(f"Connected to GraphQL endpoint at {self._endpoint}")
        return self._http

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._http:
            await self._http.aclose()
            self._http = None
            logger.debug("Disconnected from GraphQL endpoint")

    async def __aenter__(self) -> GraphQLClient:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Execute a GraphQL document and return its `data` object.

        Args:
            query: GraphQL query or mutation
            variables: Query variables

        Returns:
            The `data` object of the response

        Raises:
            TransportError: On network failure, error status, non-JSON
                body, GraphQL errors or a missing `data` object
        """
        http = await self.connect()

        try:
            response = await http.post(
                self._endpoint,
                json={"query": query, "variables": variables},
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"Request to {self._endpoint} failed: {e}",
                endpoint=self._endpoint,
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"Response from {self._endpoint} is not valid JSON "
                f"(status {response.status_code})",
                endpoint=self._endpoint,
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict):
            raise TransportError(
                "GraphQL response must be a JSON object",
                endpoint=self._endpoint,
                status_code=response.status_code,
            )

        errors = body.get("errors")
        if errors:
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise TransportError(
                f"GraphQL request failed: {messages}",
                endpoint=self._endpoint,
                status_code=response.status_code,
                errors=errors if isinstance(errors, list) else [errors],
            )

        if response.is_error:
            raise TransportError(
                f"GraphQL endpoint answered with status {response.status_code}",
                endpoint=self._endpoint,
                status_code=response.status_code,
            )

        data = body.get("data")
        if not isinstance(data, dict):
            raise TransportError(
                "Response doesn't contain a `data` object",
                endpoint=self._endpoint,
                status_code=response.status_code,
            )

        return data

    async def next_args(
        self,
        public_key: str,
        view_id: str | None = None,
    ) -> EntryArgs:
        """Query arguments for the next entry of an author.

        Args:
            public_key: Public key of the author
            view_id: Optional serialised document view id

        Returns:
            EntryArgs for the next entry
        """
        variables: dict[str, Any] = {"publicKey": public_key}
        if view_id is not None:
            variables["viewId"] = view_id

        data = await self.request(GQL_NEXT_ARGS, variables)
        return self._parse_entry_args(data, "nextArgs")

    async def publish(self, entry: str, operation: str) -> EntryArgs:
        """Publish an encoded entry and operation.

        Args:
            entry: Hex-encoded signed entry
            operation: Hex-encoded operation

        Returns:
            EntryArgs for the next entry on the same log
        """
        data = await self.request(
            GQL_PUBLISH,
            {"entry": entry, "operation": operation},
        )
        return self._parse_entry_args(data, "publish")

    def _parse_entry_args(self, data: dict[str, Any], field_name: str) -> EntryArgs:
        """Convert a response field to EntryArgs."""
        payload = data.get(field_name)
        if payload is None:
            raise TransportError(
                f"Response doesn't contain field `{field_name}`",
                endpoint=self._endpoint,
            )

        try:
            return EntryArgs.model_validate(payload)
        except pydantic.ValidationError as e:
            raise TransportError(
                f"Malformed `{field_name}` payload: {e}",
                endpoint=self._endpoint,
            ) from e
