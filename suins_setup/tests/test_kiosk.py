from __future__ import annotations

from typing import Any, Dict, List, Tuple

import httpx
import pytest
import respx

from suins_setup.errors import RemoteQueryError, RpcError
from suins_setup.rpc.http import SuiRpcClient
from suins_setup.rpc.kiosk import KioskClient
from suins_setup.setup.day_one import PolicyOutcome, asset_type, create_day_one_transfer_policy
from suins_setup.tx.ops import PtbSetupBuilder
from suins_setup.types import Network

ITEM = "0x" + "22" * 32 + "::day_one::DayOne"
POLICY_A = "0x" + "aa" * 32
POLICY_B = "0x" + "bb" * 32


class FakeRpc:
    """JSON-RPC stub keyed by method name; each entry is a list of answers."""

    def __init__(self, answers: Dict[str, List[Any]]) -> None:
        self.answers = {k: list(v) for k, v in answers.items()}
        self.calls: List[Tuple[str, Any]] = []

    def request(self, method: str, params: Any = None) -> Any:
        self.calls.append((method, params))
        answer = self.answers[method].pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer


def _event(pid: str, item: str = ITEM) -> Dict[str, Any]:
    return {"parsedJson": {"id": pid}, "type": f"0x2::transfer_policy::TransferPolicyCreated<{item}>"}


def _policy_object(pid: str, item: str = ITEM, framework: str = "0x2") -> Dict[str, Any]:
    return {
        "data": {
            "objectId": pid,
            "type": f"{framework}::transfer_policy::TransferPolicy<{item}>",
            "owner": {"Shared": {"initial_shared_version": 7}},
            "content": {
                "dataType": "moveObject",
                "fields": {
                    "balance": "15",
                    "rules": {
                        "type": "0x2::vec_set::VecSet<0x1::type_name::TypeName>",
                        "fields": {
                            "contents": [
                                {"type": "0x1::type_name::TypeName", "fields": {"name": "abc::royalty_rule::Rule"}}
                            ]
                        },
                    },
                },
            },
        }
    }


def test_no_events_means_no_policies():
    rpc = FakeRpc({"suix_queryEvents": [{"data": [], "hasNextPage": False}]})
    assert KioskClient(rpc).query_transfer_policy(ITEM) == []
    method, params = rpc.calls[0]
    assert method == "suix_queryEvents"
    assert params[0] == {"MoveEventType": f"0x2::transfer_policy::TransferPolicyCreated<{ITEM}>"}
    assert len(rpc.calls) == 1


def test_events_are_paged_and_objects_fetched():
    rpc = FakeRpc(
        {
            "suix_queryEvents": [
                {"data": [_event(POLICY_A)], "hasNextPage": True, "nextCursor": {"txDigest": "d1", "eventSeq": "0"}},
                {"data": [_event(POLICY_B), _event(POLICY_A)], "hasNextPage": False},
            ],
            "sui_multiGetObjects": [
                [_policy_object(POLICY_A), {"error": {"code": "deleted", "object_id": POLICY_B}}]
            ],
        }
    )
    records = KioskClient(rpc, page_size=1).query_transfer_policy(ITEM)

    assert [r.id for r in records] == [POLICY_A]
    rec = records[0]
    assert rec.balance == 15
    assert rec.rules == ("abc::royalty_rule::Rule",)
    assert rec.type.endswith(f"TransferPolicy<{ITEM}>")

    second_page = rpc.calls[1][1]
    assert second_page[1] == {"txDigest": "d1", "eventSeq": "0"}
    assert second_page[2] == 1
    assert rpc.calls[2] == (
        "sui_multiGetObjects",
        [[POLICY_A, POLICY_B], {"showType": True, "showOwner": True, "showContent": True}],
    )


def test_padded_framework_address_is_accepted():
    rpc = FakeRpc(
        {
            "suix_queryEvents": [{"data": [_event(POLICY_A)], "hasNextPage": False}],
            "sui_multiGetObjects": [[_policy_object(POLICY_A, framework="0x" + "0" * 63 + "2")]],
        }
    )
    assert [r.id for r in KioskClient(rpc).query_transfer_policy(ITEM)] == [POLICY_A]


def test_objects_of_another_type_are_dropped():
    other = "0x" + "33" * 32 + "::day_one::DayOne"
    not_a_policy = _policy_object(POLICY_B)
    not_a_policy["data"]["type"] = "0x2::kiosk::Kiosk"
    rpc = FakeRpc(
        {
            "suix_queryEvents": [{"data": [_event(POLICY_A), _event(POLICY_B)], "hasNextPage": False}],
            "sui_multiGetObjects": [[_policy_object(POLICY_A, item=other), not_a_policy]],
        }
    )
    assert KioskClient(rpc).query_transfer_policy(ITEM) == []


class EndlessEvents:
    """Every page reports more; deleted policies up to `live_page`, then a live one."""

    def __init__(self, live_page: int) -> None:
        self.live_page = live_page
        self.pages = 0
        self.fetched: List[str] = []

    def request(self, method: str, params: Any = None) -> Any:
        if method == "suix_queryEvents":
            self.pages += 1
            pid = "0x" + f"{self.pages:064x}"
            return {"data": [_event(pid)], "hasNextPage": True, "nextCursor": {"eventSeq": str(self.pages)}}
        self.fetched.extend(params[0])
        live = "0x" + f"{self.live_page:064x}"
        return [_policy_object(pid) if pid == live else {"error": {"code": "deleted"}} for pid in params[0]]


def test_truncated_event_scan_is_an_error():
    rpc = EndlessEvents(live_page=21)
    with pytest.raises(RemoteQueryError) as ei:
        KioskClient(rpc).query_transfer_policy(ITEM)
    assert ei.value.asset_type == ITEM
    assert ei.value.context["pages"] == rpc.pages == 20
    assert rpc.fetched == []


def test_truncated_scan_never_builds_a_second_policy(builder):
    with pytest.raises(RemoteQueryError):
        create_day_one_transfer_policy(builder, KioskClient(EndlessEvents(live_page=21)), Network.TESTNET)
    assert builder.ops == []


def test_rpc_error_becomes_remote_query_error():
    cause = RpcError("RPC transport failed", rpc_code=-32098, method="suix_queryEvents")
    rpc = FakeRpc({"suix_queryEvents": [cause]})
    with pytest.raises(RemoteQueryError) as ei:
        KioskClient(rpc).query_transfer_policy(ITEM)
    assert ei.value.asset_type == ITEM
    assert ei.value.context["rpc_code"] == -32098
    assert ei.value.__cause__ is cause


@respx.mock
def test_end_to_end_existing_policy_is_skipped():
    url = "http://fullnode.test:9000"
    item = asset_type(Network.TESTNET)
    respx.post(url).mock(
        side_effect=[
            httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": {"data": [_event(POLICY_A, item)], "hasNextPage": False}}),
            httpx.Response(200, json={"jsonrpc": "2.0", "id": 2, "result": [_policy_object(POLICY_A, item)]}),
        ]
    )
    builder = PtbSetupBuilder()
    with SuiRpcClient(url, max_retries=0) as rpc:
        result = create_day_one_transfer_policy(builder, KioskClient(rpc), Network.TESTNET)
    assert result.outcome is PolicyOutcome.SKIPPED
    assert len(builder.tx) == 0


@respx.mock
def test_end_to_end_unreachable_node_aborts_policy():
    url = "http://fullnode.test:9000"
    respx.post(url).mock(side_effect=httpx.ConnectError("refused"))
    builder = PtbSetupBuilder()
    with SuiRpcClient(url, max_retries=0) as rpc:
        with pytest.raises(RemoteQueryError):
            create_day_one_transfer_policy(builder, KioskClient(rpc), Network.TESTNET)
    assert len(builder.tx) == 0
