from __future__ import annotations

import json
import re

from .config import GeneratorConfig
from .docs import append_doc, build_doc_lines
from .errors import PropertyKindError
from .model import Interface, Property, PropertyKind, TypeAlias, UnionAlternative
from .text import dedupe, strip_quotes

INDENT = "    "
EXCLUSIVE_KINDS = (
    PropertyKind.SELF_REFERENTIAL,
    PropertyKind.LITERAL_CONSTANT,
    PropertyKind.UNION,
)
VERSION_RE = re.compile(r"\d+(?:\.\d+)*")


def version_key(since: str | None) -> tuple[int, ...]:
    if not since:
        return ()
    match = VERSION_RE.search(since)
    if match is None:
        return ()
    return tuple(int(part) for part in match.group(0).split("."))


def reorder_alternatives(
    alternatives: list[UnionAlternative],
) -> list[UnionAlternative]:
    # Decoders take the first alternative that fits, so order is significant.
    return sorted(
        alternatives, key=lambda alt: (alt.deprecated, version_key(alt.since))
    )


def property_kinds(prop: Property, enclosing_name: str) -> PropertyKind:
    kinds = prop.kind
    if prop.type == enclosing_name:
        kinds |= PropertyKind.SELF_REFERENTIAL
    present = [kind for kind in EXCLUSIVE_KINDS if kind in kinds]
    if len(present) > 1:
        raise PropertyKindError(
            enclosing_name, prop.name, ", ".join(kind.name for kind in present)
        )
    return kinds


def effective_type(prop: Property) -> str:
    if PropertyKind.UNION not in prop.kind:
        return prop.type
    arms = dedupe([alt.type for alt in reorder_alternatives(prop.alternatives)])
    if len(arms) == 1:
        return arms[0]
    return f"std::variant<{', '.join(arms)}>"


def string_literal(text: str) -> str:
    return json.dumps(strip_quotes(text))


def render_property(prop: Property, enclosing_name: str, indent: str = INDENT) -> str:
    kinds = property_kinds(prop, enclosing_name)
    comments = build_doc_lines(
        prop.documentation, since=prop.since, deprecated=prop.deprecated
    )

    if PropertyKind.SELF_REFERENTIAL in kinds:
        decl = f"std::unique_ptr<{prop.type}> {prop.name};"
    elif prop.optional:
        decl = f"std::optional<{effective_type(prop)}> {prop.name};"
    elif PropertyKind.LITERAL_CONSTANT in kinds:
        for alternative in prop.literal_alternatives:
            comments.append(f"{prop.name} = {string_literal(alternative)}")
        literal = string_literal(prop.literal or "")
        decl = f"static inline const std::string {prop.name} = {literal};"
    else:
        decl = f"{effective_type(prop)} {prop.name};"

    lines: list[str] = []
    append_doc(lines, indent, comments)
    lines.append(f"{indent}{decl}")
    return "\n".join(lines)


def render_interface(interface: Interface, indent: str = "") -> str:
    lines: list[str] = []
    append_doc(
        lines,
        indent,
        build_doc_lines(
            interface.documentation,
            since=interface.since,
            deprecated=interface.deprecated,
        ),
    )
    bases = ", ".join(f"public {base}" for base in interface.extends)
    header = f"struct {interface.name}"
    if bases:
        header += f" : {bases}"
    lines.append(f"{indent}{header} {{")

    inner = indent + INDENT
    blocks = [render_interface(child, inner) for child in interface.children]
    blocks.extend(
        render_property(prop, interface.name, inner) for prop in interface.properties
    )
    if blocks:
        lines.append("\n\n".join(blocks))
    else:
        lines.append(f"{inner}// empty")

    lines.append(f"{indent}}};")
    return "\n".join(lines)


def render_alias(alias: TypeAlias, config: GeneratorConfig) -> str | None:
    if alias.name in config.skipped_aliases:
        return None
    lines: list[str] = []
    append_doc(
        lines,
        "",
        build_doc_lines(
            alias.documentation, since=alias.since, deprecated=alias.deprecated
        ),
    )
    lines.append(f"using {alias.name} = {alias.value};")
    return "\n".join(lines)
