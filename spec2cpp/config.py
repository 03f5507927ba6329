"""Configuration tables that retarget the generator to a protocol meta-model."""

from __future__ import annotations

import dataclasses
import json
import pathlib
from dataclasses import dataclass, field

from .errors import ConfigError

DEFAULT_FETCH_URL = (
    "https://raw.githubusercontent.com/microsoft/language-server-protocol/"
    "gh-pages/_specifications/lsp/{version}/metaModel/metaModel.json"
)
DEFAULT_FETCH_TIMEOUT = 30.0

# Keep compact form stable; do not run formatter inside this block.
# fmt: off
DEFAULT_RESERVED_NAMES = (
    "Message", "RequestMessage", "ResponseMessage", "ResponseError",
    "NotificationMessage", "LSPObject", "LSPAny", "LSPArray", "T",
)
DEFAULT_BASE_TYPES = {
    "string": "std::string", "integer": "int", "uinteger": "unsigned int",
    "decimal": "double", "boolean": "bool", "null": "std::nullptr_t",
    "DocumentUri": "std::string", "URI": "std::string", "RegExp": "std::string",
}
# fmt: on

TYPES_ARTIFACT = "types"
JSON_ARTIFACT = "types_json"
NOTIFICATIONS_ARTIFACT = "notifications"
REQUESTS_ARTIFACT = "requests"


@dataclass
class GeneratorConfig:
    namespace: str = "Lsp"
    tool_name: str = "spec2cpp"

    enum_renames: dict[str, str] = field(
        default_factory=lambda: {"InitializeError": "InitializeErrorCodes"}
    )
    reserved_names: set[str] = field(
        default_factory=lambda: set(DEFAULT_RESERVED_NAMES)
    )
    skipped_aliases: set[str] = field(
        default_factory=lambda: {"integer", "uinteger", "decimal"}
    )
    json_exceptions: set[str] = field(
        default_factory=lambda: {
            "SelectionRange",
            "FormattingOptions",
            "ChangeAnnotationsType",
        }
    )
    method_prefixes: tuple[str, ...] = ("$", "window", "client")

    base_types: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_BASE_TYPES)
    )
    type_overrides: dict[str, str] = field(
        default_factory=lambda: {
            "LSPAny": "nlohmann::json",
            "LSPObject": "nlohmann::json",
            "LSPArray": "std::vector<nlohmann::json>",
        }
    )
    object_type: str = "nlohmann::json"
    unit_type: str = "std::nullptr_t"
    error_type: str = "std::nullptr_t"

    file_names: dict[str, str] = field(
        default_factory=lambda: {
            TYPES_ARTIFACT: "types.h",
            JSON_ARTIFACT: "types_json.h",
            NOTIFICATIONS_ARTIFACT: "notifications.h",
            REQUESTS_ARTIFACT: "requests.h",
        }
    )
    includes: dict[str, list[str]] = field(
        default_factory=lambda: {
            TYPES_ARTIFACT: [
                "<nlohmann/json.hpp>",
                "<memory>",
                "<optional>",
                "<string>",
                "<tuple>",
                "<unordered_map>",
                "<variant>",
                "<vector>",
            ],
            JSON_ARTIFACT: ['"json.h"', '"types.h"'],
            NOTIFICATIONS_ARTIFACT: ['"notificationmessage.h"', '"types.h"'],
            REQUESTS_ARTIFACT: ['"requestmessage.h"', '"types.h"'],
        }
    )

    @classmethod
    def from_dict(cls, payload: dict) -> GeneratorConfig:
        known = {f.name: f for f in dataclasses.fields(cls)}
        config = cls()
        for key, value in payload.items():
            if key not in known:
                raise ConfigError(f"unknown configuration key `{key}`")
            current = getattr(config, key)
            if isinstance(current, (set, tuple)):
                if not isinstance(value, list):
                    raise ConfigError(f"configuration key `{key}` must be a list")
                value = type(current)(value)
            elif isinstance(current, dict):
                if not isinstance(value, dict):
                    raise ConfigError(f"configuration key `{key}` must be an object")
                value = {**current, **value}
            setattr(config, key, value)
        return config

    @classmethod
    def from_file(cls, path: pathlib.Path) -> GeneratorConfig:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"cannot read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid json in {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigError(f"JSON root in '{path}' must be an object")
        return cls.from_dict(payload)
