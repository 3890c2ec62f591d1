from __future__ import annotations

import copy
import threading
from typing import Any, Callable, List, Optional, Sequence, Tuple

import pytest

from suins_setup.registry import PACKAGES, build_registry
from suins_setup.types import NOT_DEPLOYED, TransferPolicyRecord


class RecordingBuilder:
    """
    SetupBuilder that records each append as (op, args) and hands back
    string handles like "h0", "h1", ...
    """

    def __init__(self) -> None:
        self.ops: List[Tuple[str, Tuple[Any, ...]]] = []

    def _record(self, op: str, *args: Any) -> str:
        self.ops.append((op, args))
        return f"h{len(self.ops) - 1}"

    def create_display(self, publisher, keys, values, item_type):
        return self._record("create_display", publisher, tuple(keys), tuple(values), item_type)

    def update_display_version(self, display, item_type):
        return self._record("update_display_version", display, item_type)

    def create_transfer_policy(self, item_type, publisher):
        return self._record("create_transfer_policy", item_type, publisher)

    def transfer_objects(self, objects, recipient):
        return self._record("transfer_objects", tuple(objects), recipient)

    @property
    def names(self) -> List[str]:
        return [op for op, _ in self.ops]


class FakePolicyProvider:
    """Transfer-policy provider with a fixed answer (or a fixed failure)."""

    def __init__(
        self,
        existing: int = 0,
        *,
        error: Optional[BaseException] = None,
        before_return: Optional[Callable[[], None]] = None,
    ) -> None:
        self.existing = existing
        self.error = error
        self.before_return = before_return
        self.queries: List[str] = []
        self._lock = threading.Lock()

    def query_transfer_policy(self, asset_type: str) -> Sequence[TransferPolicyRecord]:
        with self._lock:
            self.queries.append(asset_type)
        if self.error is not None:
            raise self.error
        if self.before_return is not None:
            self.before_return()
        return [
            TransferPolicyRecord(id="0x" + f"{i + 1:064x}", type=f"TransferPolicy<{asset_type}>")
            for i in range(self.existing)
        ]


@pytest.fixture
def builder() -> RecordingBuilder:
    return RecordingBuilder()


@pytest.fixture
def raw_table():
    """Deep copy of the shipped table, safe to edit per test."""
    return copy.deepcopy({k: dict(v) for k, v in PACKAGES.items()})


@pytest.fixture
def make_registry(raw_table):
    def _make(**edits_by_network):
        table = copy.deepcopy(raw_table)
        for network, edits in edits_by_network.items():
            table[network].update(edits)
        return build_registry(table)

    return _make


@pytest.fixture
def unpublished_registry(make_registry):
    """Testnet entry whose publisher has not been deployed."""
    return make_registry(testnet={"publisher_id": NOT_DEPLOYED})
