"""Assemble the four generated artifacts from a protocol model."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field

from .config import (
    JSON_ARTIFACT,
    NOTIFICATIONS_ARTIFACT,
    REQUESTS_ARTIFACT,
    TYPES_ARTIFACT,
    GeneratorConfig,
)
from .errors import ArtifactWriteError
from .model import Interface, Model
from .normalize import normalize
from .render_enums import render_enum
from .render_json import render_binding, render_enum_binding
from .render_messages import render_notification, render_request
from .render_types import render_alias, render_interface
from .resolver import resolve_order


@dataclass
class GenerationResult:
    # file name -> full artifact text
    artifacts: dict[str, str] = field(default_factory=dict)
    removed: list[str] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)


def wrap_artifact(kind: str, blocks: list[str], config: GeneratorConfig) -> str:
    lines: list[str] = [
        f"// File generated by {config.tool_name} tool",
        "// DO NOT MAKE ANY CHANGES HERE",
        "",
        "#pragma once",
        "",
    ]
    includes = config.includes.get(kind, [])
    lines.extend(f"#include {include}" for include in includes)
    if includes:
        lines.append("")
    lines.extend([f"namespace {config.namespace} {{", ""])

    for block in blocks:
        if not block:
            continue
        lines.append(block.rstrip())
        lines.append("")

    lines.append(f"}}  // namespace {config.namespace}")
    return "\n".join(lines) + "\n"


def render_declarations(model: Model, config: GeneratorConfig) -> list[str]:
    blocks = [render_enum(enumeration) for enumeration in model.enumerations]
    for entity in resolve_order(model.aliases, model.interfaces):
        if isinstance(entity, Interface):
            blocks.append(render_interface(entity))
        else:
            blocks.append(render_alias(entity, config) or "")
    return blocks


def render_bindings(model: Model, config: GeneratorConfig) -> list[str]:
    blocks = [
        render_enum_binding(enumeration) or "" for enumeration in model.enumerations
    ]
    blocks.extend(
        render_binding(interface, model.interfaces, config)
        for interface in model.interfaces
    )
    return blocks


def generate(model: Model, config: GeneratorConfig | None = None) -> GenerationResult:
    config = config or GeneratorConfig()
    removed = normalize(model, config)

    bodies = {
        TYPES_ARTIFACT: render_declarations(model, config),
        JSON_ARTIFACT: render_bindings(model, config),
        NOTIFICATIONS_ARTIFACT: [
            render_notification(entry, config) for entry in model.notifications
        ],
        REQUESTS_ARTIFACT: [render_request(entry, config) for entry in model.requests],
    }
    artifacts = {
        config.file_names[kind]: wrap_artifact(kind, blocks, config)
        for kind, blocks in bodies.items()
    }

    return GenerationResult(
        artifacts=artifacts,
        removed=removed,
        counts={
            "enums": len(model.enumerations),
            "aliases": len(model.aliases),
            "interfaces": len(model.interfaces),
            "notifications": len(model.notifications),
            "requests": len(model.requests),
        },
    )


def write_artifacts(
    artifacts: dict[str, str], output_dir: pathlib.Path, *, check: bool = False
) -> list[pathlib.Path]:
    """Write every artifact under ``output_dir``.

    With ``check`` nothing is written; the returned list holds the artifacts
    whose on-disk content differs. Otherwise it holds every written path.
    """
    touched: list[pathlib.Path] = []
    for file_name, content in artifacts.items():
        path = output_dir / file_name
        if check:
            try:
                existing = path.read_text(encoding="utf-8") if path.exists() else None
            except (OSError, UnicodeDecodeError) as exc:
                raise ArtifactWriteError(path, exc, action="read") from exc
            if existing != content:
                touched.append(path)
            continue
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ArtifactWriteError(path, exc) from exc
        touched.append(path)
    return touched
