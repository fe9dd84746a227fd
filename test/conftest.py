import logging
from collections.abc import Callable
from typing import Any

from pytest import Config, fixture

from topic_sync import (
    Executor,
    Session,
    TenantContext,
    TopicNode,
    TransportError,
)

logging.basicConfig(level=logging.WARNING)

TENANT_ID = "some-tenant-id"
LANGUAGE = "en"

CREATED_ID = "some-id"
"""Id returned by the fake client for every created topic."""

MARKERS = [
    "max_batch_size",
]


def pytest_configure(config: Config) -> None:
    for marker in MARKERS:
        config.addinivalue_line("markers", marker)


class FakeClient(Executor):
    """
    Records executed operations and returns canned responses.

    Responses queued via `responses` are returned first, in order; afterward
    every call returns `default_response`. If `fail_at` is set, the call with
    that (zero-based) index raises {obj}`TransportError`.
    """

    calls: list[tuple[str, dict[str, Any]]]
    responses: list[dict[str, Any]]
    default_response: dict[str, Any] | Callable[[str, dict], dict]
    fail_at: int | None

    def __init__(self):
        self.calls = []
        self.responses = []
        self.default_response = {"topic": {"create": {"id": CREATED_ID}}}
        self.fail_at = None

    def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        index = len(self.calls)
        self.calls.append((query, variables))

        if self.fail_at == index:
            raise TransportError("connection reset", status=502)

        if self.responses:
            return self.responses.pop(0)

        if callable(self.default_response):
            return self.default_response(query, variables)

        return self.default_response


@fixture
def client() -> FakeClient:
    return FakeClient()


@fixture
def tenant() -> TenantContext:
    return TenantContext(tenant_id=TENANT_ID)


@fixture
def session(request, client: FakeClient, tenant: TenantContext) -> Session:
    """
    Session backed by a fake client.

    The maximum batch size may be set using `@mark.max_batch_size(n)`.
    """
    kwargs = {}

    if marker := request.node.get_closest_marker("max_batch_size"):
        kwargs["max_batch_size"] = marker.args[0]

    return Session(client, tenant, language=LANGUAGE, **kwargs)


def make_children(count: int, prefix: str = "Some Child") -> list[TopicNode]:
    return [TopicNode(name=f"{prefix} {i + 1}") for i in range(count)]


@fixture
def build_children() -> Callable[..., list[TopicNode]]:
    """
    Factory for a list of childless topics named `<prefix> <n>`.
    """
    return make_children


@fixture
def sequential_ids(client: FakeClient) -> FakeClient:
    """
    Configure client to return a distinct id for each created topic:
    `id-1`, `id-2`, ...
    """
    count = 0

    def respond(query: str, variables: dict) -> dict:
        nonlocal count
        count += 1
        return {"topic": {"create": {"id": f"id-{count}"}}}

    client.default_response = respond
    return client
