"""Rust extractors for actix-web, rocket and axum."""

from __future__ import annotations

import re
import tomllib
from typing import List

from ..models import Model, ModelField, Route
from .core import SourceTree, balanced_span, next_name, split_top_level

_ATTRIBUTE_ROUTE = re.compile(r"#\[(get|post|put|patch|delete)\s*\(\s*\"([^\"]*)\"")
_NEXT_FN = re.compile(r"\bfn\s+(\w+)")
_AXUM_ROUTE = re.compile(r"\.route\s*\(\s*\"([^\"]*)\"\s*,")
_AXUM_METHOD = re.compile(r"\b(get|post|put|patch|delete)\s*\(\s*([\w:]+)\s*\)")
_STRUCT = re.compile(r"\bstruct\s+(\w+)\s*(?:<[^>{]*>)?\s*\{")
_FIELD = re.compile(r"^(?:pub(?:\([\w:]+\))?\s+)?(\w+)\s*:\s*(.+)$", re.DOTALL)


def extract_rust_attribute_routes(tree: SourceTree) -> List[Route]:
    """Routes declared with handler attributes such as ``#[get("/users")]``."""
    routes: List[Route] = []
    for file, content in tree.iter_texts(tree.find("**/*.rs")):
        for match in _ATTRIBUTE_ROUTE.finditer(content):
            routes.append(
                Route(
                    method=match.group(1).upper(),
                    path=match.group(2),
                    file=file,
                    handler=next_name(_NEXT_FN, content, match.end()),
                )
            )
    return routes


def extract_axum_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in tree.iter_texts(tree.find("**/*.rs")):
        for match in _AXUM_ROUTE.finditer(content):
            call = balanced_span(content, content.find("(", match.start()), "(", ")")
            if call is None:
                continue
            path = match.group(1)
            for method, handler in _AXUM_METHOD.findall(call):
                routes.append(Route(method=method.upper(), path=path, file=file, handler=handler))
    return routes


def extract_actix_routes(tree: SourceTree) -> List[Route]:
    return extract_rust_attribute_routes(tree) + extract_axum_routes(tree)


def extract_rust_models(tree: SourceTree) -> List[Model]:
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find("**/*.rs")):
        for match in _STRUCT.finditer(content):
            body = balanced_span(content, match.end() - 1)
            if body is None:
                continue
            fields = tuple(_struct_fields(body))
            if fields:
                models.append(Model(name=match.group(1), fields=fields, file=file))
    return models


def _struct_fields(body: str) -> List[ModelField]:
    lines = [line for line in body.splitlines() if not line.strip().startswith(("//", "#["))]
    fields: List[ModelField] = []
    for entry in split_top_level("\n".join(lines), ","):
        match = _FIELD.match(entry.strip())
        if match:
            fields.append(ModelField(match.group(1), " ".join(match.group(2).split())))
    return fields


def read_cargo_toml(tree: SourceTree) -> dict:
    content = tree.read("Cargo.toml")
    if content is None:
        return {}
    try:
        package = tomllib.loads(content).get("package")
    except tomllib.TOMLDecodeError:
        return {"type": "rust"}
    name = package.get("name") if isinstance(package, dict) else None
    return {"app_name": name if isinstance(name, str) else "unknown", "type": "rust"}


__all__ = [
    "extract_actix_routes",
    "extract_axum_routes",
    "extract_rust_attribute_routes",
    "extract_rust_models",
    "read_cargo_toml",
]
