"""Core data models shared across codeingest components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

LANGUAGES = (
    "elixir",
    "python",
    "javascript",
    "typescript",
    "ruby",
    "go",
    "java",
    "php",
    "rust",
    "csharp",
    "unknown",
)

UNKNOWN = "unknown"

Stack = Tuple[str, Optional[str]]


@dataclass(frozen=True)
class Route:
    """An HTTP route declared in the analyzed tree."""

    method: str
    path: str
    file: str
    handler: Optional[str] = None


@dataclass(frozen=True)
class ModelField:
    name: str
    type: str


@dataclass(frozen=True)
class Model:
    """A data model, schema or struct together with its declared fields."""

    name: str
    fields: Tuple[ModelField, ...]
    file: str


@dataclass(frozen=True)
class Controller:
    """A request handler module and the actions it exposes."""

    name: str
    actions: Tuple[str, ...]
    file: str


@dataclass(frozen=True)
class Component:
    """A UI component with its declared props and handled UI events."""

    name: str
    props: Tuple[str, ...]
    file: str
    events: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Service:
    """A business-logic unit and its public functions."""

    name: str
    functions: Tuple[str, ...]
    file: str


@dataclass(frozen=True)
class CodebaseAnalysis:
    """Immutable result of a single analysis pass over a source tree."""

    path: str
    language: str
    framework: Optional[str]
    routes: Tuple[Route, ...] = ()
    models: Tuple[Model, ...] = ()
    controllers: Tuple[Controller, ...] = ()
    components: Tuple[Component, ...] = ()
    services: Tuple[Service, ...] = ()
    # Excluded from the hash only; dicts are unhashable.
    config: Dict[str, Any] = field(default_factory=dict, hash=False)
    readme: Optional[str] = None

    @property
    def stack(self) -> Stack:
        return self.language, self.framework

    def counts(self) -> Dict[str, int]:
        return {
            "routes": len(self.routes),
            "models": len(self.models),
            "controllers": len(self.controllers),
            "components": len(self.components),
            "services": len(self.services),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable representation of the analysis."""
        return asdict(self)

    def summary(self, sample_size: int = 5) -> Dict[str, Any]:
        """Return counts plus a handful of sample records per category for display."""
        return {
            "path": self.path,
            "language": self.language,
            "framework": self.framework,
            "counts": self.counts(),
            "samples": {
                "routes": [f"{route.method} {route.path}" for route in self.routes[:sample_size]],
                "models": [model.name for model in self.models[:sample_size]],
                "controllers": [item.name for item in self.controllers[:sample_size]],
                "components": [item.name for item in self.components[:sample_size]],
                "services": [item.name for item in self.services[:sample_size]],
            },
            "has_readme": self.readme is not None,
        }


__all__ = [
    "CodebaseAnalysis",
    "Component",
    "Controller",
    "LANGUAGES",
    "Model",
    "ModelField",
    "Route",
    "Service",
    "Stack",
    "UNKNOWN",
]
