"""Order command - show the publish order and check the curated list."""

from __future__ import annotations

import typer

from mrel.cli.commands._helpers import exit_on_error, exit_with_pipeline_error, require_packages
from mrel.cli.context import build_context
from mrel.output.console import Style
from mrel.release.errors import OrderInvalid
from mrel.services.release.order import check_order, dependency_graph, resolve_order
from mrel.services.release.publish import registry_naming


def order(
    check: bool = typer.Option(
        False,
        "--check",
        help="Fail if the curated order lists a package before its dependencies",
    ),
) -> None:
    """Print the resolved publish order."""
    ctx = build_context()
    curated = ctx.config.packages.publish_order
    packages = require_packages(ctx)

    graph = exit_on_error(dependency_graph(curated, packages), ctx)
    resolved = exit_on_error(resolve_order(curated, graph), ctx)
    naming = registry_naming(ctx.config)

    ctx.console.header("Publish order")
    for index, identifier in enumerate(resolved, start=1):
        deps = graph.get(identifier, ())
        suffix = f"  (after {', '.join(deps)})" if deps else ""
        ctx.console.print(f"{index:>3}. {naming.registry_name(identifier)}{suffix}")

    violations = check_order(curated, graph)
    if not violations:
        ctx.console.success("curated order respects workspace dependencies")
        return

    for violation in violations:
        ctx.console.warning(violation)
    if check:
        exit_with_pipeline_error(
            OrderInvalid(reason="listed before a dependency", details=violations),
            ctx,
        )
    ctx.console.print("releases publish in the resolved order above", Style.DIM)
