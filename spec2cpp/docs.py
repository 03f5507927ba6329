from __future__ import annotations

import re


def split_documentation(documentation: str | None) -> list[str]:
    if not documentation:
        return []
    return [line.rstrip() for line in str(documentation).splitlines()]


def documentation_mentions_tag(documentation: str | None, tag: str) -> bool:
    if not documentation:
        return False
    return bool(
        re.search(rf"@{re.escape(tag)}\b", documentation, flags=re.IGNORECASE)
    )


def build_doc_lines(
    documentation: str | None,
    *,
    since: str | None = None,
    deprecated: str | None = None,
) -> list[str]:
    lines = split_documentation(documentation)

    if since and not documentation_mentions_tag(documentation, "since"):
        lines.append(f"@since {since}")
    if deprecated and not documentation_mentions_tag(documentation, "deprecated"):
        for chunk in f"@deprecated {deprecated}".splitlines():
            lines.append(chunk.rstrip())

    while lines and not lines[-1]:
        lines.pop()
    return lines


def append_doc(out: list[str], indent: str, comments: list[str]) -> None:
    for line in comments:
        if not line:
            out.append(f"{indent}///")
            continue
        out.append(f"{indent}/// {line}")
