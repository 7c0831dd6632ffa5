"""Go extractors for gin, echo, fiber, gorilla/mux and net/http."""

from __future__ import annotations

import re
from typing import List

from ..models import Controller, Model, ModelField, Route, Service
from .core import SourceTree, balanced_span, stem, unique

_UPPER_VERB = re.compile(
    r"\.(GET|POST|PUT|PATCH|DELETE|Any)\s*\(\s*\"(/[^\"]*)\"(?:\s*,\s*([\w.]+))?"
)
_FIBER_VERB = re.compile(
    r"\.(Get|Post|Put|Patch|Delete|All)\s*\(\s*\"(/[^\"]*)\"(?:\s*,\s*([\w.]+))?"
)
_HANDLE_FUNC = re.compile(
    r"\.HandleFunc\s*\(\s*\"([^\"]*)\"\s*,\s*([\w.]+)\s*\)(?:\s*\.Methods\s*\(([^)]*)\))?"
)
_STRUCT = re.compile(r"\btype\s+(\w+)\s+struct\s*\{")
_STRUCT_FIELD = re.compile(r"^([A-Za-z_]\w*(?:\s*,\s*[A-Za-z_]\w*)*)\s+([\w.*\[\]]+)")
_FUNC = re.compile(r"^func\s+(?:\(\s*\w*\s*\*?\w+\s*\)\s*)?(\w+)\s*\(", re.MULTILINE)


def _go_sources(tree: SourceTree, *patterns: str) -> List[str]:
    return [path for path in tree.find(*patterns) if not path.endswith("_test.go")]


def extract_go_routes(tree: SourceTree) -> List[Route]:
    """Routes registered through gin/echo, fiber or mux/net-http style calls."""
    routes: List[Route] = []
    for file, content in tree.iter_texts(_go_sources(tree, "**/*.go")):
        for match in _UPPER_VERB.finditer(content):
            method, path, handler = match.groups()
            routes.append(Route(method=_verb(method), path=path, file=file, handler=handler))
        for match in _FIBER_VERB.finditer(content):
            method, path, handler = match.groups()
            routes.append(Route(method=_verb(method), path=path, file=file, handler=handler))
        for match in _HANDLE_FUNC.finditer(content):
            path, handler, methods = match.groups()
            verbs = re.findall(r"\"(\w+)\"", methods or "") or ["GET"]
            for verb in verbs:
                routes.append(Route(method=verb.upper(), path=path, file=file, handler=handler))
    return routes


def _verb(name: str) -> str:
    upper = name.upper()
    return "ANY" if upper in {"ANY", "ALL"} else upper


def extract_go_models(tree: SourceTree) -> List[Model]:
    models: List[Model] = []
    for file, content in tree.iter_texts(_go_sources(tree, "**/*.go")):
        for match in _STRUCT.finditer(content):
            body = balanced_span(content, match.end() - 1)
            if body is None:
                continue
            fields = tuple(_struct_fields(body))
            if fields:
                models.append(Model(name=match.group(1), fields=fields, file=file))
    return models


def _struct_fields(body: str) -> List[ModelField]:
    fields: List[ModelField] = []
    for line in body.splitlines():
        line = line.split("//", 1)[0].strip()
        if not line or "{" in line or "}" in line:
            continue
        match = _STRUCT_FIELD.match(line)
        if not match:
            continue
        names, kind = match.groups()
        for name in names.split(","):
            fields.append(ModelField(name.strip(), kind))
    return fields


def extract_go_handlers(tree: SourceTree) -> List[Controller]:
    files = _go_sources(tree, "**/handlers/*.go", "**/handler/*.go", "**/controllers/*.go")
    return [
        Controller(name=stem(file, ".go"), actions=unique(_FUNC.findall(content)), file=file)
        for file, content in tree.iter_texts(files)
    ]


def extract_go_services(tree: SourceTree) -> List[Service]:
    services: List[Service] = []
    for file, content in tree.iter_texts(_go_sources(tree, "**/services/*.go", "**/service/*.go")):
        functions = unique(name for name in _FUNC.findall(content) if name not in {"init", "main"})
        if functions:
            services.append(Service(name=stem(file, ".go"), functions=functions, file=file))
    return services


def read_go_config(tree: SourceTree) -> dict:
    content = tree.read("go.mod")
    if content is None:
        return {}
    match = re.search(r"^module\s+(\S+)", content, re.MULTILINE)
    return {"app_name": match.group(1) if match else "unknown", "type": "go"}


__all__ = [
    "extract_go_handlers",
    "extract_go_models",
    "extract_go_routes",
    "extract_go_services",
    "read_go_config",
]
