from __future__ import annotations

from typing import Sequence

from .errors import DependencyCycleError, UnresolvedReferenceError
from .model import Declaration, Interface, TypeAlias


def stable_partition(
    items: list[tuple[Declaration, set[str]]],
) -> tuple[list[tuple[Declaration, set[str]]], list[tuple[Declaration, set[str]]]]:
    ready = [item for item in items if not item[1]]
    blocked = [item for item in items if item[1]]
    return ready, blocked


def resolve_order(
    aliases: Sequence[TypeAlias], interfaces: Sequence[Interface]
) -> list[Declaration]:
    """Order aliases and interfaces so each follows everything it depends on.

    Every iteration emits one wave: the aliases with no outstanding
    dependency, then the interfaces with none, both in input order. The names
    of the wave are then pruned from the dependency sets of whatever remains.
    Self-references never block an entity. The dependency sets of the inputs
    are left untouched.
    """
    universe = {entity.name for entity in [*aliases, *interfaces]}
    pending_aliases = [
        (alias, set(alias.dependencies) - {alias.name}) for alias in aliases
    ]
    pending_interfaces = [
        (interface, set(interface.dependencies) - {interface.name})
        for interface in interfaces
    ]

    ordered: list[Declaration] = []
    while pending_aliases or pending_interfaces:
        ready_aliases, pending_aliases = stable_partition(pending_aliases)
        ready_interfaces, pending_interfaces = stable_partition(pending_interfaces)
        wave = [entity for entity, _ in [*ready_aliases, *ready_interfaces]]

        if not wave:
            raise stall_error([*pending_aliases, *pending_interfaces], universe)

        ordered.extend(wave)
        emitted = {entity.name for entity in wave}
        for _, deps in [*pending_aliases, *pending_interfaces]:
            deps -= emitted

    return ordered


def stall_error(
    blocked: list[tuple[Declaration, set[str]]], universe: set[str]
) -> Exception:
    for entity, deps in blocked:
        missing = sorted(deps - universe)
        if missing:
            return UnresolvedReferenceError(entity.name, missing[0])
    return DependencyCycleError([entity.name for entity, _ in blocked])
