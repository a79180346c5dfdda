"""Publish order: curated list checked against the manifest dependency graph.

The curated list is the operator's statement of intent. The actual order is
a topological sort of the workspace-relative dependency graph among the
listed packages, with the curated position as tie-break, so a curated list
that is already valid is returned unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from mrel.core.result import Err, Ok, Result
from mrel.output.console import ConsoleProtocol
from mrel.release.errors import OrderInvalid
from mrel.release.model import PackageDescriptor

DependencyGraph = dict[str, tuple[str, ...]]


def dependency_graph(
    order: Sequence[str],
    packages: Mapping[str, PackageDescriptor],
) -> Result[DependencyGraph, OrderInvalid]:
    """Edges ``identifier -> listed identifiers it depends on``.

    Dependencies on packages outside the order are ignored.
    """
    seen: set[str] = set()
    duplicates: list[str] = []
    for identifier in order:
        if identifier in seen:
            duplicates.append(identifier)
        seen.add(identifier)
    if duplicates:
        return Err(OrderInvalid(reason="duplicate packages", details=tuple(duplicates)))

    unknown = [x for x in order if x not in packages]
    if unknown:
        return Err(
            OrderInvalid(reason="packages without a manifest", details=tuple(unknown))
        )

    listed = set(order)
    name_to_id = {pkg.name: pkg.identifier for pkg in packages.values()}
    graph: DependencyGraph = {}
    for identifier in order:
        deps = (name_to_id.get(name) for name in packages[identifier].workspace_dependencies)
        graph[identifier] = tuple(
            sorted(d for d in deps if d is not None and d in listed and d != identifier)
        )
    return Ok(graph)


def check_order(order: Sequence[str], graph: Mapping[str, Sequence[str]]) -> tuple[str, ...]:
    """Every place where a package is listed before one of its dependencies."""
    position = {identifier: i for i, identifier in enumerate(order)}
    violations: list[str] = []
    for identifier in order:
        for dep in graph.get(identifier, ()):
            if dep in position and position[dep] > position[identifier]:
                violations.append(f"{identifier} is listed before its dependency {dep}")
    return tuple(violations)


def resolve_order(
    order: Sequence[str], graph: Mapping[str, Sequence[str]]
) -> Result[tuple[str, ...], OrderInvalid]:
    """Topological sort of ``order`` using the curated position as tie-break."""
    remaining = list(order)
    emitted: list[str] = []
    done: set[str] = set()

    while remaining:
        ready = next(
            (x for x in remaining if all(dep in done for dep in graph.get(x, ()))),
            None,
        )
        if ready is None:
            return Err(OrderInvalid(reason="dependency cycle", details=tuple(remaining)))
        remaining.remove(ready)
        emitted.append(ready)
        done.add(ready)

    return Ok(tuple(emitted))


def plan_publish_order(
    order: Sequence[str],
    packages: Mapping[str, PackageDescriptor],
    console: ConsoleProtocol,
) -> Result[tuple[str, ...], OrderInvalid]:
    """Resolve the order to publish in, warning where the curated list is wrong."""
    graph = dependency_graph(order, packages)
    if isinstance(graph, Err):
        return graph

    for violation in check_order(order, graph.value):
        console.warning(f"publish order: {violation}")

    resolved = resolve_order(order, graph.value)
    if isinstance(resolved, Ok) and resolved.value != tuple(order):
        console.warning("publishing in dependency order instead of the curated order")
    return resolved
