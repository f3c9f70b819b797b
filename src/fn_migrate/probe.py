"""
Cluster identity probe and target compatibility checks.

The probe itself applies no policy so the same call serves both the
source and the target.  ``validate_target`` is applied by the caller to
the target's info only.
"""

from __future__ import annotations

import logging

from .client import GatewayClient
from .models import ClusterInfo

__all__ = [
    "COMMUNITY_EDITION_MARKER",
    "OPERATOR_MARKER",
    "IncompatibleTargetError",
    "format_cluster_info",
    "probe",
    "validate_target",
]

logger = logging.getLogger(__name__)

COMMUNITY_EDITION_MARKER = "ce"
OPERATOR_MARKER = "operator"


class IncompatibleTargetError(Exception):
    """Raised when the target cluster cannot accept multi-namespace deploys."""


def probe(client: GatewayClient) -> ClusterInfo:
    """Fetch the cluster's identity from its info endpoint."""
    info = client.get_info()
    logger.debug("Probed %s: %s", client.api_url, info)
    return info


def validate_target(info: ClusterInfo) -> None:
    """Reject targets running the community edition or lacking operator mode.

    Raises:
        IncompatibleTargetError: If the provider string fails either check.
    """
    if COMMUNITY_EDITION_MARKER in info.provider:
        raise IncompatibleTargetError(
            "Invalid target cluster configuration: OpenFaaS CE detected."
        )
    if OPERATOR_MARKER not in info.provider:
        raise IncompatibleTargetError("Target cluster must have operator mode enabled.")


def format_cluster_info(label: str, info: ClusterInfo) -> str:
    return (
        f"{label}:\n"
        f" - {info.orchestration}/{info.provider}\n"
        f" - version: {info.version}\n"
        f" - commit: {info.sha}\n"
    )
