"""Phoenix and plain Elixir extractors."""

from __future__ import annotations

import re
from typing import List, Optional

from ..models import Component, Controller, Model, ModelField, Route, Service
from .core import SourceTree, unique

_ROUTE = re.compile(
    r"^\s*(get|post|put|patch|delete|live)\s+\"([^\"]+)\""
    r"(?:\s*,\s*([\w.]+)(?:\s*,\s*:(\w+))?)?",
    re.MULTILINE,
)
_MODULE = re.compile(r"defmodule\s+([\w.]+)")
_SCHEMA = re.compile(r"schema\s+\"(\w+)\"\s+do(.*?)^\s*end\b", re.DOTALL | re.MULTILINE)
_FIELD = re.compile(r"field\s+:(\w+)\s*,\s*:?([\w.]+)")
_ASSOCIATION = re.compile(r"(belongs_to|has_one|has_many|many_to_many)\s+:(\w+)")
_DEF = re.compile(r"\bdef\s+(\w+[?!]?)\s*(?:\(|,\s*do:|do\b)")
_ATTR = re.compile(r"\battr\s+:(\w+)")
_EVENT = re.compile(r"def\s+handle_event\s*\(\s*\"([^\"]+)\"")


def module_name(content: str) -> str:
    match = _MODULE.search(content)
    return match.group(1) if match else "Unknown"


def extract_phoenix_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    seen: set[tuple[str, str]] = set()
    for file, content in tree.iter_texts(tree.find("**/router.ex")):
        for match in _ROUTE.finditer(content):
            method, path, plug, action = match.groups()
            key = (method.upper(), path)
            if key in seen:
                continue
            seen.add(key)
            routes.append(
                Route(
                    method=method.upper(),
                    path=path,
                    file=file,
                    handler=_handler(plug, action),
                )
            )
    return routes


def _handler(plug: Optional[str], action: Optional[str]) -> Optional[str]:
    if not plug:
        return None
    return f"{plug}.{action}" if action else plug


def extract_ecto_models(tree: SourceTree) -> List[Model]:
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find("**/*.ex")):
        if 'schema "' not in content:
            continue
        match = _SCHEMA.search(content)
        if not match:
            continue
        body = match.group(2)
        fields = [ModelField(name, kind) for name, kind in _FIELD.findall(body)]
        fields.extend(ModelField(name, kind) for kind, name in _ASSOCIATION.findall(body))
        models.append(Model(name=module_name(content), fields=tuple(fields), file=file))
    return models


def extract_phoenix_controllers(tree: SourceTree) -> List[Controller]:
    return [
        Controller(
            name=module_name(content),
            actions=unique(_DEF.findall(content)),
            file=file,
        )
        for file, content in tree.iter_texts(tree.find("**/*_controller.ex"))
    ]


def extract_phoenix_components(tree: SourceTree) -> List[Component]:
    files = tree.find("**/*_live.ex", "**/*_live/*.ex", "**/components/*.ex")
    return [
        Component(
            name=module_name(content),
            props=unique(_ATTR.findall(content)),
            file=file,
            events=unique(_EVENT.findall(content)),
        )
        for file, content in tree.iter_texts(files)
    ]


def extract_elixir_contexts(tree: SourceTree) -> List[Service]:
    files = [
        path
        for path in tree.find("lib/**/*.ex")
        if "_web/" not in path
        and not path.endswith(("/repo.ex", "/application.ex"))
    ]
    services: List[Service] = []
    for file, content in tree.iter_texts(files):
        functions = unique(name for name in _DEF.findall(content) if not name.startswith("_"))
        if functions:
            services.append(Service(name=module_name(content), functions=functions, file=file))
    return services


def read_mix_config(tree: SourceTree) -> dict:
    content = tree.read("mix.exs")
    if content is None:
        return {}
    match = re.search(r"app:\s*:(\w+)", content)
    return {"app_name": match.group(1) if match else "unknown", "type": "elixir"}


__all__ = [
    "extract_ecto_models",
    "extract_elixir_contexts",
    "extract_phoenix_components",
    "extract_phoenix_controllers",
    "extract_phoenix_routes",
    "module_name",
    "read_mix_config",
]
