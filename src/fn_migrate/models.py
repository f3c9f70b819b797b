"""
Shared data models used across the fn-migrate project.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# ------------------------------------------------------------------
# Fields reported by the gateway that describe runtime state rather
# than the deployable spec.  Kept on read, never sent on create/update.
# ------------------------------------------------------------------

STATUS_FIELDS = (
    "replicas",
    "availableReplicas",
    "invocationCount",
    "createdAt",
    "usage",
)


@dataclass(frozen=True)
class Endpoint:
    """A gateway base URL plus its basic-auth credential pair."""
    base_url: str
    username: str = ""
    password: str = ""

    def __repr__(self) -> str:
        """Redact the password in repr output."""
        secret = "***" if self.password else "(empty)"
        return (
            f"Endpoint(base_url={self.base_url!r}, username={self.username!r}, "
            f"password={secret!r})"
        )


@dataclass(frozen=True)
class ClusterInfo:
    orchestration: str
    provider: str
    version: str = ""
    sha: str = ""

    @classmethod
    def from_api(cls, data: dict) -> ClusterInfo:
        """Build from the ``GET /system/info`` payload."""
        provider = data.get("provider") or {}
        version = provider.get("version") or {}
        return cls(
            orchestration=provider.get("orchestration") or "",
            provider=provider.get("provider") or "",
            version=version.get("release") or "",
            sha=version.get("sha") or "",
        )


@dataclass(frozen=True)
class FunctionSummary:
    name: str
    namespace: str = ""

    @classmethod
    def from_api(cls, data: dict) -> FunctionSummary:
        return cls(name=data.get("name") or "", namespace=data.get("namespace") or "")


@dataclass(frozen=True)
class FunctionResources:
    """CPU / memory ceiling or floor for a function."""
    memory: str = ""
    cpu: str = ""

    @classmethod
    def from_api(cls, data: dict | None) -> FunctionResources | None:
        if not data:
            return None
        return cls(memory=data.get("memory", "") or "", cpu=data.get("cpu", "") or "")

    def to_api(self) -> dict[str, str]:
        body: dict[str, str] = {}
        if self.memory:
            body["memory"] = self.memory
        if self.cpu:
            body["cpu"] = self.cpu
        return body


@dataclass
class FunctionDefinition:
    """The full deployable spec of a function, as read from a gateway.

    ``status`` holds the runtime fields the gateway reports alongside the
    spec (replica counts, invocation count, ...).  They are kept for logging
    only and are never part of the create/update request body.
    """
    name: str
    image: str
    namespace: str = ""
    env_process: str = ""
    env_vars: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    constraints: list[str] = field(default_factory=list)
    secrets: list[str] = field(default_factory=list)
    limits: FunctionResources | None = None
    requests: FunctionResources | None = None
    read_only_root_filesystem: bool = False
    status: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict) -> FunctionDefinition:
        """Parse the gateway's function status JSON.

        The status endpoint names the function ``name``; the deployment
        body names it ``service``.  Both are accepted.
        """
        return cls(
            name=data.get("name") or data.get("service") or "",
            image=data.get("image") or "",
            namespace=data.get("namespace", "") or "",
            env_process=data.get("envProcess", "") or "",
            env_vars=dict(data.get("envVars") or {}),
            labels=dict(data.get("labels") or {}),
            annotations=dict(data.get("annotations") or {}),
            constraints=list(data.get("constraints") or []),
            secrets=list(data.get("secrets") or []),
            limits=FunctionResources.from_api(data.get("limits")),
            requests=FunctionResources.from_api(data.get("requests")),
            read_only_root_filesystem=bool(data.get("readOnlyRootFilesystem", False)),
            status={k: data[k] for k in STATUS_FIELDS if k in data},
        )

    def to_deployment(self) -> dict[str, Any]:
        """Build the POST/PUT ``/system/functions`` request body."""
        body: dict[str, Any] = {
            "service": self.name,
            "image": self.image,
        }
        if self.namespace:
            body["namespace"] = self.namespace
        if self.env_process:
            body["envProcess"] = self.env_process
        if self.env_vars:
            body["envVars"] = dict(self.env_vars)
        if self.labels:
            body["labels"] = dict(self.labels)
        if self.annotations:
            body["annotations"] = dict(self.annotations)
        if self.constraints:
            body["constraints"] = list(self.constraints)
        if self.secrets:
            body["secrets"] = list(self.secrets)
        if self.limits is not None:
            body["limits"] = self.limits.to_api()
        if self.requests is not None:
            body["requests"] = self.requests.to_api()
        body["readOnlyRootFilesystem"] = self.read_only_root_filesystem
        return body


# ------------------------------------------------------------------
# Per-function outcome of a migration run
# ------------------------------------------------------------------

@dataclass
class MigrationResult:
    name: str
    namespace: str = ""
    action: str = ""  # "create", "update" or "dry-run"
    status_code: int | None = None

    @property
    def method(self) -> str:
        if self.action == "create":
            return "POST"
        if self.action == "update":
            return "PUT"
        return ""
