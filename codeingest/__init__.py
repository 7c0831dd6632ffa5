"""codeingest: static extraction of routes, models, controllers, components and services."""

from __future__ import annotations

from .analyzer import analyze
from .detector import detect_stack
from .errors import CodeIngestError, ConfigError, InvalidPathError
from .models import CodebaseAnalysis, Component, Controller, Model, ModelField, Route, Service

__all__ = [
    "CodeIngestError",
    "CodebaseAnalysis",
    "Component",
    "ConfigError",
    "Controller",
    "InvalidPathError",
    "Model",
    "ModelField",
    "Route",
    "Service",
    "analyze",
    "detect_stack",
]
