"""
HTTP JSON-RPC client (sync) for a Sui fullnode.

- httpx transport, friendly to unit tests (respx) and mocks.
- Retries transient transport failures and 429/502/503/504 with jittered
  exponential backoff. JSON-RPC error objects are never retried.

Example:
    from suins_setup.rpc.http import SuiRpcClient
    with SuiRpcClient("https://fullnode.testnet.sui.io:443") as rpc:
        print(rpc.request("sui_getChainIdentifier"))
"""

from __future__ import annotations

import json
import random
import time
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Union

import httpx

from ..config import SetupConfig
from ..errors import RpcError
from ..logging import get_logger

log = get_logger(__name__)

JSON = Union[dict, list, str, int, float, bool, None]
Params = Union[Sequence[Any], Mapping[str, Any], None]

# Transport-level failure; not part of the JSON-RPC error space
TRANSPORT_ERROR = -32098


def _is_retriable_http(status: int) -> bool:
    return status in (429, 502, 503, 504)


def _jitter_backoff(base: float, factor: float, attempt: int, jitter: float) -> float:
    return base * (factor ** max(attempt - 1, 0)) + random.random() * jitter


class _Transient(Exception):
    """Internal marker for failures worth another attempt."""


@dataclass
class SuiRpcClient:
    """Synchronous JSON-RPC 2.0 client over HTTP."""

    url: str
    timeout: float = 30.0
    max_retries: int = 3
    backoff_base: float = 0.15
    backoff_factor: float = 1.8
    backoff_jitter: float = 0.2
    headers: Optional[Mapping[str, str]] = None
    _ids: Iterator[int] = field(default_factory=lambda: count(1), repr=False)
    _client: Optional[httpx.Client] = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        merged: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.headers:
            merged.update(dict(self.headers))
        self._client = httpx.Client(timeout=self.timeout, headers=merged)

    @classmethod
    def from_config(cls, cfg: SetupConfig) -> "SuiRpcClient":
        return cls(
            url=cfg.rpc_url,
            timeout=cfg.request_timeout,
            max_retries=cfg.max_retries,
            backoff_base=cfg.backoff_base,
            headers=cfg.http_headers(),
        )

    # --- context manager -------------------------------------------------

    def __enter__(self) -> "SuiRpcClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    # --- public API ------------------------------------------------------

    def request(self, method: str, params: Params = None) -> JSON:
        """Perform a single JSON-RPC request and return `result` or raise RpcError."""
        payload = self._make_payload(method, params)
        last: Optional[Exception] = None
        for attempt in range(1, self.max_retries + 2):  # N retries -> N+1 attempts
            try:
                return self._send_once(method, payload)
            except _Transient as e:
                last = e
                if attempt > self.max_retries:
                    break
                delay = _jitter_backoff(
                    self.backoff_base, self.backoff_factor, attempt, self.backoff_jitter
                )
                log.debug(
                    "rpc retry",
                    extra={"method": method, "attempt": attempt, "delay": round(delay, 3), "cause": str(e)},
                )
                time.sleep(delay)
        raise RpcError("RPC transport failed", rpc_code=TRANSPORT_ERROR, method=method, data=str(last))

    # --- internals -------------------------------------------------------

    def _make_payload(self, method: str, params: Params) -> Dict[str, Any]:
        if params is None:
            params = []
        elif isinstance(params, Mapping):
            params = dict(params)
        elif isinstance(params, Sequence) and not isinstance(params, (str, bytes, bytearray)):
            params = list(params)
        else:
            params = [params]
        return {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}

    def _send_once(self, method: str, payload: Dict[str, Any]) -> JSON:
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        try:
            r = self._client.post(self.url, content=body)
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            raise _Transient(f"{type(e).__name__}: {e}") from e
        if _is_retriable_http(r.status_code):
            raise _Transient(f"HTTP {r.status_code}")
        try:
            resp = r.json()
        except ValueError as e:
            raise RpcError(
                "Non-JSON response from RPC",
                method=method,
                data=f"HTTP {r.status_code}: {r.text[:256]}",
            ) from e

        if not isinstance(resp, dict):
            raise RpcError("Invalid JSON-RPC response type", method=method, data=type(resp).__name__)
        if resp.get("error") is not None:
            err = resp["error"] or {}
            raise RpcError(
                str(err.get("message", "Unknown error")),
                rpc_code=int(err.get("code", -32603)),
                method=method,
                data=err.get("data"),
            )
        if "result" not in resp:
            raise RpcError("Malformed JSON-RPC response", method=method, data=resp)
        return resp["result"]


__all__ = ["SuiRpcClient", "TRANSPORT_ERROR", "JSON", "Params"]
