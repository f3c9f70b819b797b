"""
Shared fixtures for fn-migrate tests.

``FakeGateway`` stands in for ``GatewayClient``: it serves functions from
an in-memory dict and records every call, so tests can assert exactly
which requests a run would have made.
"""

from __future__ import annotations

import logging

import pytest

from fn_migrate.client import GatewayError
from fn_migrate.models import (
    ClusterInfo,
    FunctionDefinition,
    FunctionResources,
    FunctionSummary,
)


class FakeGateway:
    def __init__(
        self,
        functions: list[FunctionDefinition] | None = None,
        info: ClusterInfo | None = None,
        api_url: str = "http://gateway.test",
    ):
        self.api_url = api_url
        self.functions = {(f.name, f.namespace): f for f in functions or []}
        self.info = info or ClusterInfo("kubernetes", "operator", "0.5.1", "abc123")
        self.calls: list[tuple] = []
        self.fail_get: set[str] = set()
        self.fail_lookup: set[str] = set()
        self.fail_deploy: set[str] = set()

    def get_info(self) -> ClusterInfo:
        self.calls.append(("get_info",))
        return self.info

    def list_functions(self, namespace: str) -> list[FunctionSummary]:
        self.calls.append(("list_functions", namespace))
        return [
            FunctionSummary(name, ns)
            for (name, ns) in self.functions
            if ns == namespace
        ]

    def get_function(self, name: str, namespace: str) -> FunctionDefinition:
        self.calls.append(("get_function", name, namespace))
        if name in self.fail_get:
            raise GatewayError("GET", f"/system/function/{name}", status_code=500)
        try:
            return self.functions[(name, namespace)]
        except KeyError:
            raise GatewayError("GET", f"/system/function/{name}", status_code=404) from None

    def lookup_function(self, name: str, namespace: str) -> FunctionDefinition | None:
        self.calls.append(("lookup_function", name, namespace))
        if name in self.fail_lookup:
            raise GatewayError("GET", f"/system/function/{name}", reason="connection reset")
        return self.functions.get((name, namespace))

    def deploy(self, definition: FunctionDefinition) -> int:
        self.calls.append(("deploy", definition))
        if definition.name in self.fail_deploy:
            raise GatewayError("POST", "/system/functions", status_code=400, body="bad image")
        self.functions[(definition.name, definition.namespace)] = definition
        return 202

    def update(self, definition: FunctionDefinition) -> int:
        self.calls.append(("update", definition))
        self.functions[(definition.name, definition.namespace)] = definition
        return 200

    def writes(self) -> list[tuple[str, str]]:
        return [
            (call[0], call[1].name)
            for call in self.calls
            if call[0] in ("deploy", "update")
        ]


def make_function(name: str, image: str = "ghcr.io/example/fn:v1", **kwargs) -> FunctionDefinition:
    kwargs.setdefault("namespace", "openfaas-fn")
    return FunctionDefinition(name=name, image=image, **kwargs)


@pytest.fixture
def full_function() -> FunctionDefinition:
    """A definition with every deployable field set, plus runtime status."""
    return FunctionDefinition(
        name="figlet",
        image="ghcr.io/openfaas/figlet:latest",
        namespace="openfaas-fn",
        env_process="figlet",
        env_vars={"write_debug": "true", "read_timeout": "30s"},
        labels={"com.openfaas.scale.min": "2"},
        annotations={"topic": "cron-function"},
        constraints=["node.platform.os == linux", "disk=ssd"],
        secrets=["api-key", "db-password"],
        limits=FunctionResources(memory="128Mi", cpu="500m"),
        requests=FunctionResources(memory="64Mi", cpu="100m"),
        read_only_root_filesystem=True,
        status={"replicas": 2, "availableReplicas": 2, "invocationCount": 1337},
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo handler changes made by ``setup_logging`` during a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
