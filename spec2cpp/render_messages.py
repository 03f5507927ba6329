from __future__ import annotations

import json
from typing import Iterable

from .config import GeneratorConfig
from .model import Notification, Request
from .text import upper_first


def symbol_name(
    method: str, prefixes: Iterable[str] = ("$", "window", "client")
) -> str:
    """Map a wire method to a C++ symbol, e.g. ``$/progress`` -> ``Progress``."""
    segments = method.split("/")
    if len(segments) > 1 and segments[0] in set(prefixes):
        segments = segments[1:]
    return "".join(upper_first(segment) for segment in segments)


def render_notification(entry: Notification, config: GeneratorConfig) -> str:
    name = symbol_name(entry.method, config.method_prefixes)
    params = entry.params or config.unit_type
    return "\n".join(
        [
            f"inline constexpr char {name}Name[] = {json.dumps(entry.method)};",
            f"struct {name}Notification : public "
            f"NotificationMessage<{name}Name, {params}>",
            "{};",
        ]
    )


def render_request(entry: Request, config: GeneratorConfig) -> str:
    name = symbol_name(entry.method, config.method_prefixes)
    params = entry.params or config.unit_type
    result = entry.result or config.unit_type
    return "\n".join(
        [
            f"inline constexpr char {name}Name[] = {json.dumps(entry.method)};",
            f"struct {name}Request : public RequestMessage<{name}Name, {params}, "
            f"{result}, {config.error_type}>",
            "{};",
        ]
    )
