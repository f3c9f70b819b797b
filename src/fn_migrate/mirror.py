"""
Create-or-update mirroring of function definitions between two gateways.

Processing order:
  Phase 1 - List functions in the working namespace on the source and GET
            every full definition.  Any failure aborts before the target is
            touched, so a partial listing never becomes a partial migration.
  Phase 2 - For each definition, sorted by name: look it up on the target
            (same name, same namespace), then PUT if it exists or POST if
            the gateway answered 404.  Any other lookup failure, or any
            failed POST/PUT, aborts the run.  Functions already migrated are
            not rolled back, and target functions unknown to the source are
            left alone.

In dry-run mode phase 2 only reports what would be deployed.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from .client import GatewayClient
from .config import DEFAULT_NAMESPACE
from .models import FunctionDefinition, MigrationResult

__all__ = [
    "build_target_definition",
    "fetch_source_definitions",
    "mirror",
]

logger = logging.getLogger(__name__)


def fetch_source_definitions(
    source: GatewayClient, namespace: str = DEFAULT_NAMESPACE,
) -> list[FunctionDefinition]:
    """GET the full definition of every function in *namespace*.

    Returns the definitions sorted by function name.
    """
    definitions: dict[str, FunctionDefinition] = {}
    for summary in source.list_functions(namespace):
        spec = source.get_function(summary.name, namespace)
        # The gateway may omit the namespace; it is the one we read from.
        if not spec.namespace:
            spec = replace(spec, namespace=namespace)
        definitions[summary.name] = spec
    return [definitions[name] for name in sorted(definitions)]


def build_target_definition(spec: FunctionDefinition) -> FunctionDefinition:
    """Copy the deployable fields of *spec* into a new definition.

    Runtime status reported by the source is dropped; the namespace is
    carried over as-is.
    """
    return replace(
        spec,
        env_vars=dict(spec.env_vars),
        labels=dict(spec.labels),
        annotations=dict(spec.annotations),
        constraints=list(spec.constraints),
        secrets=list(spec.secrets),
        status={},
    )


def mirror(
    source: GatewayClient,
    target: GatewayClient,
    namespace: str = DEFAULT_NAMESPACE,
    dry_run: bool = False,
) -> list[MigrationResult]:
    """Mirror every function in *namespace* from *source* to *target*.

    Raises GatewayError on the first failed request; results for the
    functions handled before the failure have already been printed.
    """
    deployed = fetch_source_definitions(source, namespace)
    results: list[MigrationResult] = []

    for spec in deployed:
        print(f"=> Deploy: {spec.name} to target cluster")
        if dry_run:
            results.append(
                MigrationResult(name=spec.name, namespace=spec.namespace, action="dry-run")
            )
            continue

        existing = target.lookup_function(spec.name, spec.namespace) is not None
        fn = build_target_definition(spec)

        if existing:
            status_code = target.update(fn)
            result = MigrationResult(spec.name, spec.namespace, "update", status_code)
        else:
            status_code = target.deploy(fn)
            result = MigrationResult(spec.name, spec.namespace, "create", status_code)

        logger.info(
            "%s '%s' in namespace '%s': %d",
            result.action, spec.name, spec.namespace, status_code,
        )
        print(f"<= {spec.name}: {status_code} [{result.method}]")
        results.append(result)

    return results
