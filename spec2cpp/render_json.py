from __future__ import annotations

import json
from typing import Sequence

from .config import GeneratorConfig
from .model import EnumKind, Enumeration, Interface


def flatten_properties(
    interface: Interface,
    interfaces: Sequence[Interface],
    stack: set[str] | None = None,
) -> list[str]:
    """Own property names first, then each base's flattened names in order."""
    if stack is None:
        stack = set()
    if interface.name in stack:
        return []
    stack.add(interface.name)

    by_name = {candidate.name: candidate for candidate in interfaces}
    names = [prop.name.rstrip("?") for prop in interface.properties]
    for base in interface.extends:
        parent = by_name.get(base)
        if parent is not None:
            names.extend(flatten_properties(parent, interfaces, stack))

    stack.remove(interface.name)
    return names


def render_binding(
    interface: Interface,
    interfaces: Sequence[Interface],
    config: GeneratorConfig,
    parents: tuple[str, ...] = (),
) -> str:
    scope = "::".join((*parents, interface.name))
    if interface.name in config.json_exceptions:
        return f"JSONIFY_FWD({scope})"

    lines = [
        render_binding(child, interfaces, config, (*parents, interface.name))
        for child in interface.children
    ]
    properties = flatten_properties(interface, interfaces)
    if properties:
        lines.append(f"JSONIFY({scope}, {', '.join(properties)})")
    else:
        lines.append(f"JSONIFY_EMPTY({scope})")
    return "\n".join(lines)


def render_enum_binding(enumeration: Enumeration) -> str | None:
    if enumeration.kind is not EnumKind.STRING:
        return None
    lines = [f"JSONIFY_ENUM({enumeration.name}, {{"]
    for value in enumeration.values:
        wire = json.dumps(value.value)
        lines.append(f"    {{{enumeration.name}::{value.name}, {wire}}},")
    lines.append("})")
    return "\n".join(lines)
