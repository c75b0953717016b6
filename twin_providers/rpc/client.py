# twin_providers/rpc/client.py
from __future__ import annotations

import itertools
import logging
from typing import Any, Optional, Sequence

import requests

logger = logging.getLogger(__name__)


class RpcError(Exception):
    """JSON-RPC error object returned by the node."""

    def __init__(self, method: str, code: Any, message: str, data: Any = None) -> None:
        super().__init__(f"{method}: [{code}] {message}")
        self.method = method
        self.code = code
        self.message = message
        self.data = data


class RpcTransportError(Exception):
    """HTTP or connection failure; the node never answered the call."""


class JsonRpcClient:
    """
    Minimal JSON-RPC 2.0 client over HTTP.

    Transport only: callers own method names, params and result parsing.
    """

    def __init__(self, url: str, *, timeout_s: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self._ids = itertools.count(1)

    def call(self, method: str, params: Sequence[Any] = ()) -> Any:
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": list(params)}
        logger.debug("rpc -> %s %s", method, body["params"])

        try:
            response = self.session.post(self.url, json=body, timeout=self.timeout_s)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise RpcTransportError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise RpcTransportError(f"{method} returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise RpcTransportError(f"{method} returned an unexpected body: {type(data).__name__}")

        err = data.get("error")
        if err:
            if isinstance(err, dict):
                raise RpcError(method, err.get("code"), str(err.get("message", "")), err.get("data"))
            raise RpcError(method, None, str(err))

        return data.get("result")
