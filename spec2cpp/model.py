"""In-memory protocol model consumed by the normalizer and the renderers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union


class EnumKind(enum.Enum):
    NUMERIC = "numeric"
    STRING = "string"


class PropertyKind(enum.Flag):
    PLAIN = 0
    SELF_REFERENTIAL = enum.auto()
    LITERAL_CONSTANT = enum.auto()
    UNION = enum.auto()


@dataclass
class EnumValue:
    name: str
    value: str
    documentation: str | None = None
    deprecated: str | None = None


@dataclass
class Enumeration:
    name: str
    kind: EnumKind
    values: list[EnumValue] = field(default_factory=list)
    documentation: str | None = None
    since: str | None = None
    deprecated: str | None = None

    @property
    def dependencies(self) -> set[str]:
        return set()


@dataclass
class TypeAlias:
    name: str
    value: str
    dependencies: set[str] = field(default_factory=set)
    documentation: str | None = None
    since: str | None = None
    deprecated: str | None = None


@dataclass
class UnionAlternative:
    type: str
    deprecated: bool = False
    since: str | None = None


@dataclass
class Property:
    name: str
    type: str
    optional: bool = False
    documentation: str | None = None
    kind: PropertyKind = PropertyKind.PLAIN
    # LITERAL_CONSTANT: the constant and any other known tags of the discriminator.
    literal: str | None = None
    literal_alternatives: list[str] = field(default_factory=list)
    # UNION: alternatives in declaration order.
    alternatives: list[UnionAlternative] = field(default_factory=list)
    deprecated: str | None = None
    since: str | None = None


@dataclass
class Interface:
    name: str
    extends: list[str] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    dependencies: set[str] = field(default_factory=set)
    documentation: str | None = None
    since: str | None = None
    deprecated: str | None = None

    @property
    def properties(self) -> list[Property]:
        return [m for m in self.members if isinstance(m, Property)]

    @property
    def children(self) -> list[Interface]:
        return [m for m in self.members if isinstance(m, Interface)]


Member = Union[Property, Interface]
Declaration = Union[TypeAlias, Interface]


@dataclass
class Notification:
    method: str
    params: str | None = None
    documentation: str | None = None


@dataclass
class Request:
    method: str
    params: str | None = None
    result: str | None = None
    documentation: str | None = None


@dataclass
class Model:
    enumerations: list[Enumeration] = field(default_factory=list)
    aliases: list[TypeAlias] = field(default_factory=list)
    interfaces: list[Interface] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    requests: list[Request] = field(default_factory=list)

    def enum_names(self) -> list[str]:
        return [e.name for e in self.enumerations]

    def interface_names(self) -> list[str]:
        return [i.name for i in self.interfaces]

    def alias_names(self) -> list[str]:
        return [a.name for a in self.aliases]

    def find_interface(self, name: str) -> Interface | None:
        for interface in self.interfaces:
            if interface.name == name:
                return interface
        return None
