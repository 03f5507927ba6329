"""LSP meta-model to C++ code generator."""

from .config import GeneratorConfig
from .errors import (
    ArtifactWriteError,
    ConfigError,
    DependencyCycleError,
    FetchError,
    GeneratorError,
    PropertyKindError,
    SchemaError,
    UnresolvedReferenceError,
)
from .generator import GenerationResult, generate, write_artifacts
from .metamodel import load_model, load_model_file
from .normalize import normalize
from .resolver import resolve_order

__all__ = [
    "ArtifactWriteError",
    "ConfigError",
    "DependencyCycleError",
    "FetchError",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "PropertyKindError",
    "SchemaError",
    "UnresolvedReferenceError",
    "generate",
    "load_model",
    "load_model_file",
    "normalize",
    "resolve_order",
    "write_artifacts",
]
