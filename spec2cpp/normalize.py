from __future__ import annotations

from .config import GeneratorConfig
from .model import EnumKind, Model
from .text import strip_quotes, upper_first


def normalize(model: Model, config: GeneratorConfig | None = None) -> list[str]:
    """Clean up ``model`` in place before any rendering happens.

    Enumerations are deduplicated (first occurrence wins) and renamed through
    ``config.enum_renames``; enumerator names and literals are normalized;
    framework-reserved interfaces and aliases are dropped, as are aliases
    shadowed by an enumeration or interface of the same name. Finally enum
    and reserved names are pruned from every remaining dependency set, since
    neither can take part in an ordering cycle.

    Re-applying to an already normalized model changes nothing. The model is
    the only output that matters to rendering; the returned list merely
    describes every removed declaration so callers can report it.
    """
    config = config or GeneratorConfig()
    removed: list[str] = []

    for enumeration in model.enumerations:
        enumeration.name = config.enum_renames.get(enumeration.name, enumeration.name)

    seen: set[str] = set()
    enumerations = []
    for enumeration in model.enumerations:
        if enumeration.name in seen:
            removed.append(f"duplicate enumeration `{enumeration.name}`")
            continue
        seen.add(enumeration.name)
        enumerations.append(enumeration)
    model.enumerations[:] = enumerations

    for enumeration in model.enumerations:
        for value in enumeration.values:
            value.name = upper_first(value.name)
            if enumeration.kind is EnumKind.STRING:
                value.value = strip_quotes(value.value)
            else:
                value.value = upper_first(value.value)

    for interface in model.interfaces:
        if interface.name in config.reserved_names:
            removed.append(f"reserved interface `{interface.name}`")
    model.interfaces[:] = [
        i for i in model.interfaces if i.name not in config.reserved_names
    ]

    enum_names = set(model.enum_names())
    shadowing = enum_names | set(model.interface_names())
    aliases = []
    for alias in model.aliases:
        if alias.name in config.reserved_names:
            removed.append(f"reserved alias `{alias.name}`")
        elif alias.name in shadowing:
            removed.append(f"shadowed alias `{alias.name}`")
        else:
            aliases.append(alias)
    model.aliases[:] = aliases

    satisfied = enum_names | set(config.reserved_names)
    for entity in [*model.aliases, *model.interfaces]:
        entity.dependencies -= satisfied

    return removed

