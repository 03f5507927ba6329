"""Load an LSP metaModel schema JSON into the generator model."""

from __future__ import annotations

import json
import pathlib
import urllib.request
from dataclasses import dataclass, field

from .config import DEFAULT_FETCH_TIMEOUT, DEFAULT_FETCH_URL, GeneratorConfig
from .errors import FetchError, SchemaError
from .model import (
    EnumKind,
    Enumeration,
    EnumValue,
    Interface,
    Model,
    Notification,
    Property,
    PropertyKind,
    Request,
    TypeAlias,
    UnionAlternative,
)
from .text import dedupe, upper_first


@dataclass
class RenderContext:
    owner: str
    deps: set[str] = field(default_factory=set)
    # Receives anonymous literal structures as nested children.
    host: Interface | None = None
    # Receives anonymous literal structures as top-level interfaces instead.
    synthesized: list[Interface] | None = None
    literal_name: str = ""
    literal_count: int = 0

    def next_literal_name(self) -> str:
        self.literal_count += 1
        if self.literal_count == 1:
            return self.literal_name
        return f"{self.literal_name}{self.literal_count}"


class TypeRenderer:
    def __init__(self, schema: dict, config: GeneratorConfig):
        self.config = config
        self.declared: dict[str, dict] = {}
        for section in ("structures", "enumerations", "typeAliases"):
            for item in schema.get(section, []):
                self.declared.setdefault(item["name"], item)

    def render(self, type_expr: dict, ctx: RenderContext) -> str:
        if not isinstance(type_expr, dict):
            raise SchemaError(f"Malformed type expression at {ctx.owner}")
        kind = type_expr.get("kind")

        if kind == "base":
            name = type_expr.get("name")
            if name not in self.config.base_types:
                raise SchemaError(f"Unsupported base type: {name} at {ctx.owner}")
            return self.config.base_types[name]

        if kind == "reference":
            ref_name = type_expr["name"]
            override = self.config.type_overrides.get(ref_name)
            if override is not None:
                return override
            ctx.deps.add(ref_name)
            return ref_name

        if kind == "array":
            element = self.render(type_expr["element"], ctx)
            return f"std::vector<{element}>"

        if kind == "map":
            key = self.render(type_expr["key"], ctx)
            value = self.render(type_expr["value"], ctx)
            return f"std::unordered_map<{key}, {value}>"

        if kind == "tuple":
            items = [self.render(item, ctx) for item in type_expr.get("items", [])]
            return f"std::tuple<{', '.join(items)}>"

        if kind == "and":
            items = [self.render(item, ctx) for item in type_expr.get("items", [])]
            if len(items) == 1:
                return items[0]
            return f"std::tuple<{', '.join(items)}>"

        if kind == "or":
            unique = dedupe(
                [self.render(item, ctx) for item in type_expr.get("items", [])]
            )
            if not unique:
                return self.config.unit_type
            if len(unique) == 1:
                return unique[0]
            return f"std::variant<{', '.join(unique)}>"

        if kind == "literal":
            return self.render_literal(type_expr, ctx)

        if kind == "stringLiteral":
            return self.config.base_types["string"]

        if kind == "integerLiteral":
            return self.config.base_types["integer"]

        if kind == "booleanLiteral":
            return self.config.base_types["boolean"]

        raise SchemaError(f"Unsupported type kind: {kind} at {ctx.owner}")

    def render_literal(self, type_expr: dict, ctx: RenderContext) -> str:
        raw_properties = type_expr.get("value", {}).get("properties", [])
        if ctx.host is not None:
            child = Interface(name=ctx.next_literal_name())
            self.fill_members(child, raw_properties, ctx.deps)
            ctx.host.members.append(child)
            return child.name
        if ctx.synthesized is not None:
            struct = Interface(name=ctx.next_literal_name())
            self.fill_members(struct, raw_properties, struct.dependencies)
            struct.dependencies.discard(struct.name)
            ctx.synthesized.append(struct)
            ctx.deps.add(struct.name)
            return struct.name
        return self.config.object_type

    def alternative_for(self, type_expr: dict, rendered: str) -> UnionAlternative:
        declared = None
        if type_expr.get("kind") == "reference":
            declared = self.declared.get(type_expr.get("name"))
        if declared is None:
            return UnionAlternative(type=rendered)
        return UnionAlternative(
            type=rendered,
            deprecated=bool(declared.get("deprecated")),
            since=declared.get("since"),
        )

    def build_property(self, raw: dict, host: Interface, deps: set[str]) -> Property:
        name = raw["name"]
        type_expr = raw["type"]
        optional = bool(raw.get("optional", False))
        kind = type_expr.get("kind")
        prop = Property(
            name=name,
            type="",
            optional=optional,
            documentation=raw.get("documentation"),
            deprecated=raw.get("deprecated"),
            since=raw.get("since"),
        )

        if not optional and kind == "stringLiteral":
            prop.kind = PropertyKind.LITERAL_CONSTANT
            prop.type = self.config.base_types["string"]
            prop.literal = str(type_expr.get("value", ""))
            return prop

        items = type_expr.get("items", [])
        if (
            not optional
            and kind == "or"
            and items
            and all(item.get("kind") == "stringLiteral" for item in items)
        ):
            prop.kind = PropertyKind.LITERAL_CONSTANT
            prop.type = self.config.base_types["string"]
            prop.literal = str(items[0].get("value", ""))
            prop.literal_alternatives = [str(i.get("value", "")) for i in items[1:]]
            return prop

        if kind == "reference" and type_expr.get("name") == host.name:
            prop.kind = PropertyKind.SELF_REFERENTIAL
            prop.type = host.name
            return prop

        ctx = RenderContext(
            owner=f"{host.name}.{name}",
            deps=deps,
            host=host,
            literal_name=upper_first(name),
        )
        if kind == "or":
            alternatives = [
                self.alternative_for(item, self.render(item, ctx)) for item in items
            ]
            unique = dedupe([alt.type for alt in alternatives])
            if len(unique) > 1:
                prop.kind = PropertyKind.UNION
                prop.alternatives = alternatives
                prop.type = f"std::variant<{', '.join(unique)}>"
            else:
                prop.type = unique[0] if unique else self.config.unit_type
            return prop

        prop.type = self.render(type_expr, ctx)
        return prop

    def fill_members(
        self, interface: Interface, raw_properties: list[dict], deps: set[str]
    ) -> None:
        for raw in raw_properties:
            interface.members.append(self.build_property(raw, interface, deps))


def load_model(schema: dict, config: GeneratorConfig | None = None) -> Model:
    config = config or GeneratorConfig()
    renderer = TypeRenderer(schema, config)
    model = Model()

    for item in schema.get("enumerations", []):
        base_name = item.get("type", {}).get("name")
        kind = EnumKind.STRING if base_name == "string" else EnumKind.NUMERIC
        model.enumerations.append(
            Enumeration(
                name=item["name"],
                kind=kind,
                values=[
                    EnumValue(
                        name=str(value.get("name", "value")),
                        value=str(value.get("value", "")),
                        documentation=value.get("documentation"),
                        deprecated=value.get("deprecated"),
                    )
                    for value in item.get("values", [])
                ],
                documentation=item.get("documentation"),
                since=item.get("since"),
                deprecated=item.get("deprecated"),
            )
        )

    for item in schema.get("structures", []):
        extends = [
            x["name"]
            for x in [*item.get("extends", []), *item.get("mixins", [])]
            if x.get("kind") == "reference"
        ]
        interface = Interface(
            name=item["name"],
            extends=extends,
            documentation=item.get("documentation"),
            since=item.get("since"),
            deprecated=item.get("deprecated"),
        )
        deps = set(extends)
        renderer.fill_members(interface, item.get("properties", []), deps)
        deps.discard(interface.name)
        interface.dependencies = deps - set(config.type_overrides)
        model.interfaces.append(interface)

    for item in schema.get("typeAliases", []):
        name = item["name"]
        ctx = RenderContext(
            owner=f"alias[{name}]",
            synthesized=model.interfaces,
            literal_name=f"{name}Variant",
        )
        value = renderer.render(item["type"], ctx)
        ctx.deps.discard(name)
        model.aliases.append(
            TypeAlias(
                name=name,
                value=value,
                dependencies=ctx.deps,
                documentation=item.get("documentation"),
                since=item.get("since"),
                deprecated=item.get("deprecated"),
            )
        )

    def method_type(expr, owner: str) -> str | None:
        if expr is None:
            return None
        ctx = RenderContext(owner=owner)
        if isinstance(expr, list):
            items = [renderer.render(item, ctx) for item in expr]
            return f"std::tuple<{', '.join(items)}>"
        return renderer.render(expr, ctx)

    for item in schema.get("notifications", []):
        method = item["method"]
        model.notifications.append(
            Notification(
                method=method,
                params=method_type(item.get("params"), f"method[{method}].params"),
                documentation=item.get("documentation"),
            )
        )

    for item in schema.get("requests", []):
        method = item["method"]
        model.requests.append(
            Request(
                method=method,
                params=method_type(item.get("params"), f"method[{method}].params"),
                result=method_type(item.get("result"), f"method[{method}].result"),
                documentation=item.get("documentation"),
            )
        )

    return model


def load_model_file(
    path: pathlib.Path, config: GeneratorConfig | None = None
) -> Model:
    try:
        schema = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SchemaError(f"cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SchemaError(f"invalid json in {path}: {exc}") from exc
    if not isinstance(schema, dict):
        raise SchemaError(f"JSON root in '{path}' must be an object")
    return load_model(schema, config)


def fetch_schema(
    output: pathlib.Path,
    *,
    version: str,
) -> dict[str, object]:
    source = DEFAULT_FETCH_URL.format(version=version)

    try:
        with urllib.request.urlopen(source, timeout=DEFAULT_FETCH_TIMEOUT) as response:
            payload = response.read()
    except OSError as exc:
        raise FetchError(f"download failed: {exc}") from exc

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FetchError(f"utf-8 decode failed: {exc}") from exc

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FetchError(f"invalid json: {exc}") from exc

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")

    return {
        "source": source,
        "bytes": len(payload),
        "output": output,
        "schema_version": parsed.get("metaData", {}).get("version"),
    }
