from __future__ import annotations


class GeneratorError(RuntimeError):
    """Base class for every fatal generation failure."""


class SchemaError(GeneratorError):
    pass


class ConfigError(GeneratorError):
    pass


class FetchError(GeneratorError):
    pass


class UnresolvedReferenceError(GeneratorError):
    def __init__(self, entity: str, missing: str):
        super().__init__(
            f"unresolvable external reference: `{entity}` depends on `{missing}`"
        )
        self.entity = entity
        self.missing = missing


class DependencyCycleError(GeneratorError):
    def __init__(self, names: list[str]):
        super().__init__(f"dependency cycle between: {', '.join(names)}")
        self.names = list(names)


class PropertyKindError(GeneratorError):
    def __init__(self, owner: str, prop: str, kinds: str):
        super().__init__(
            f"{owner}.{prop}: conflicting property kinds ({kinds})"
        )
        self.owner = owner
        self.prop = prop


class ArtifactWriteError(GeneratorError):
    def __init__(self, path: object, cause: Exception, action: str = "write"):
        super().__init__(f"cannot {action} {path}: {cause}")
        self.path = path
