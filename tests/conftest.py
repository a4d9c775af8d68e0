"""Shared fixtures: a scriptable fake transport and a client wired to it."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import pytest

from adapters.arpio_client import ArpioClient

ACCOUNT_ID = "acct-123"


@dataclass
class Call:
    method: str
    path: str
    json: Any = None
    params: Mapping[str, str] | None = None


Handler = Callable[[Call], Any]


class FakeTransport:
    """In-memory `Transport`.

    Responses come from a FIFO queue or, if set, from `handler`. An exception
    instance (as response or handler result) is raised instead of returned.
    """

    def __init__(self, handler: Handler | None = None) -> None:
        self.calls: list[Call] = []
        self.handler = handler
        self._responses: list[Any] = []
        self.closed = False

    def queue(self, *responses: Any) -> None:
        self._responses.extend(responses)

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        call = Call(method, path, json, dict(params) if params is not None else None)
        self.calls.append(call)
        if self.handler is not None:
            result = self.handler(call)
        else:
            if not self._responses:
                raise AssertionError(f"unexpected request: {method} {path}")
            result = self._responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def close(self) -> None:
        self.closed = True


def app_payload(name: str, app_id: str, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "accountId": ACCOUNT_ID,
        "appId": app_id,
        "type": "standard",
        "createdAt": "2024-03-01T10:00:00Z",
        "name": name,
        "rpo": 60,
        "sourceAwsAccountId": "111111111111",
        "sourceRegion": "us-east-1",
        "syncPhase": "steady",
        "targetAwsAccountId": "222222222222",
        "targetRegion": "us-west-2",
        "selectionRules": [{"ruleType": "tag", "name": "app", "value": name}],
    }
    payload.update(overrides)
    return payload


def recovery_point_payload(rp_id: str, timestamp: str, *, protected: bool = False) -> dict[str, Any]:
    return {
        "availableAt": timestamp,
        "protected": protected,
        "recoveryPointId": rp_id,
        "timestamp": timestamp,
    }


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> ArpioClient:
    return ArpioClient(
        transport,
        ACCOUNT_ID,
        app_poll_seconds=0,
        recovery_point_poll_seconds=0,
        sleep=lambda _seconds: None,
    )
