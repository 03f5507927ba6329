from __future__ import annotations

from .docs import append_doc, build_doc_lines
from .model import EnumKind, Enumeration


def render_enum(enumeration: Enumeration) -> str:
    lines: list[str] = []
    append_doc(
        lines,
        "",
        build_doc_lines(
            enumeration.documentation,
            since=enumeration.since,
            deprecated=enumeration.deprecated,
        ),
    )
    lines.append(f"enum class {enumeration.name} {{")

    for value in enumeration.values:
        append_doc(
            lines,
            "    ",
            build_doc_lines(value.documentation, deprecated=value.deprecated),
        )
        # String enumerators carry no value; the wire text lives in the binding.
        if enumeration.kind is EnumKind.STRING:
            lines.append(f"    {value.name},")
        else:
            lines.append(f"    {value.name} = {value.value},")

    lines.append("};")
    return "\n".join(lines)
