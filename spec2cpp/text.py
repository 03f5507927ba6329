from __future__ import annotations

QUOTE_CHARS = "'\""


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in QUOTE_CHARS:
        return text[1:-1]
    return text


def dedupe(items: list[str]) -> list[str]:
    unique: list[str] = []
    seen: set[str] = set()
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique
