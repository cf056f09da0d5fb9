"""
Shared fixtures for the Shirokuma SDK tests.

Provides a deterministic stand-in for the signing engine and a fake node
answering the NextArgs query and Publish mutation through httpx.MockTransport.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

import httpx
import pytest

from shirokuma_sdk.schema import OperationFields
from shirokuma_sdk.session import Session
from shirokuma_sdk.types import EntryArgs

ENDPOINT = "http://localhost:2020/graphql"
CHAT_SCHEMA_ID = "chat_0020c65567ae37efea293e34a9c7d13f8f2bf23dbdc3b5c7b9ab46293111c48fc78b"


class FakeKeyPair:
    """Key pair with a fixed public key."""

    def __init__(self, public_key: str) -> None:
        self._public_key = public_key

    def public_key(self) -> str:
        return self._public_key


class FakeEngine:
    """Deterministic engine encoding everything as hex-encoded JSON."""

    def encode_operation(
        self,
        action: str,
        schema_id: str,
        fields: OperationFields | None = None,
        previous: list[str] | None = None,
    ) -> str:
        operation: dict[str, Any] = {"action": action, "schemaId": schema_id}
        if fields is not None:
            operation["fields"] = fields.to_dict()
        if previous is not None:
            operation["previous"] = previous
        return json.dumps(operation, sort_keys=True).encode().hex()

    def sign_and_encode_entry(
        self,
        entry_args: EntryArgs,
        operation: str,
        key_pair: FakeKeyPair,
    ) -> str:
        entry = {
            "publicKey": key_pair.public_key(),
            "logId": entry_args.log_id,
            "seqNum": entry_args.seq_num,
            "backlink": entry_args.backlink,
            "skiplink": entry_args.skiplink,
            "payloadHash": self.generate_hash(operation),
        }
        return json.dumps(entry, sort_keys=True).encode().hex()

    def generate_hash(self, value: str) -> str:
        return "0020" + hashlib.sha256(bytes.fromhex(value)).hexdigest()


class FakeNode:
    """In-memory node keeping one set of logs per author.

    A view id continues the log of the entry it points at, any other
    request starts a new log.
    """

    def __init__(self, engine: FakeEngine) -> None:
        self._engine = engine
        self.logs: dict[str, dict[int, list[str]]] = {}
        self.entry_logs: dict[str, tuple[str, int]] = {}
        self.requests: list[dict[str, Any]] = []

    @property
    def next_args_calls(self) -> list[dict[str, Any]]:
        return [r["variables"] for r in self.requests if "query NextArgs" in r["query"]]

    @property
    def publish_calls(self) -> list[dict[str, Any]]:
        return [r["variables"] for r in self.requests if "mutation Publish" in r["query"]]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)

        if "query NextArgs" in body["query"]:
            args = self._next_args(body["variables"])
            return httpx.Response(200, json={"data": {"nextArgs": args}})
        if "mutation Publish" in body["query"]:
            args = self._publish(body["variables"])
            return httpx.Response(200, json={"data": {"publish": args}})
        return httpx.Response(400, json={"errors": [{"message": "Unknown operation"}]})

    def _next_args(self, variables: dict[str, Any]) -> dict[str, Any]:
        public_key = variables["publicKey"]
        logs = self.logs.setdefault(public_key, {})

        view_id = variables.get("viewId")
        if view_id:
            for op_id in view_id.split("_"):
                owner = self.entry_logs.get(op_id)
                if owner and owner[0] == public_key:
                    return self._args_for(logs, owner[1])

        return self._args_for(logs, len(logs))

    def _publish(self, variables: dict[str, Any]) -> dict[str, Any]:
        entry_hex = variables["entry"]
        entry = json.loads(bytes.fromhex(entry_hex))
        public_key = entry["publicKey"]
        log_id = int(entry["logId"])

        log = self.logs.setdefault(public_key, {}).setdefault(log_id, [])
        entry_hash = self._engine.generate_hash(entry_hex)
        log.append(entry_hash)
        self.entry_logs[entry_hash] = (public_key, log_id)

        return self._args_for(self.logs[public_key], log_id)

    def _args_for(self, logs: dict[int, list[str]], log_id: int) -> dict[str, Any]:
        log = logs.get(log_id, [])
        return {
            "logId": str(log_id),
            "seqNum": str(len(log) + 1),
            "backlink": log[-1] if log else None,
            "skiplink": None,
        }


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def key_pair() -> FakeKeyPair:
    return FakeKeyPair("2f8e50c2ede6d936ecc3144187ff1c273808185cfbc5ff3d3748d1ff7353fc96")


@pytest.fixture
def node(engine: FakeEngine) -> FakeNode:
    return FakeNode(engine)


@pytest.fixture
def session(engine: FakeEngine, node: FakeNode, key_pair: FakeKeyPair) -> Session:
    """Session wired to the fake node with key pair and chat schema set."""
    return (
        Session(ENDPOINT, engine, transport=node.transport())
        .set_key_pair(key_pair)
        .set_schema_id(CHAT_SCHEMA_ID)
    )
