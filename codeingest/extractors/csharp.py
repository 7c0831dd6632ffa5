"""ASP.NET Core and Entity Framework extractors."""

from __future__ import annotations

import re
from typing import List, Optional

from ..models import Controller, Model, ModelField, Route, Service
from .core import SourceTree, balanced_span, join_paths, next_name, stem, unique

_CLASS_ROUTE = re.compile(r"\[Route\s*\(\s*\"([^\"]*)\"\s*\)\]")
# Declaration lines only, so "class" inside comments is ignored.
_CLASS = re.compile(
    r"^[ \t]*(?:(?:public|internal|private|protected|sealed|partial|abstract|static)\s+)*class\s+(\w+)",
    re.MULTILINE,
)
_HTTP_ATTRIBUTE = re.compile(r"\[Http(Get|Post|Put|Patch|Delete)\s*(?:\(\s*\"([^\"]*)\"[^)]*\))?\s*\]")
_MINIMAL_API = re.compile(
    r"\.Map(Get|Post|Put|Patch|Delete)\s*\(\s*\"([^\"]*)\"(?:\s*,\s*([\w.]+)\s*\))?"
)
_PUBLIC_CLASS = re.compile(r"\bpublic\s+(?:(?:partial|sealed|abstract)\s+)*class\s+(\w+)[^{]*\{")
_PROPERTY = re.compile(
    r"^\s*public\s+(?:(?:virtual|required|override)\s+)*"
    r"([\w.]+(?:<[\w<>,.?\s]*>)?(?:\[\])?\??)\s+(\w+)\s*\{\s*get",
    re.MULTILINE,
)
_PUBLIC_METHOD = re.compile(
    r"^\s*public\s+(?:(?:static|virtual|override|async|sealed)\s+)*"
    r"[\w.]+(?:<[\w<>,.?\s]*>)?(?:\[\])?\??\s+(\w+)\s*(?:<[^>]*>)?\s*\(",
    re.MULTILINE,
)
_METHOD_NAME = re.compile(r"\b(\w+)\s*\([^)]*\)\s*(?:\{|=>)")


def _controller_token(class_name: Optional[str]) -> str:
    if not class_name:
        return ""
    return class_name[: -len("Controller")] if class_name.endswith("Controller") else class_name


def _with_slash(path: str) -> str:
    return path if path.startswith("/") else "/" + path


def extract_dotnet_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in tree.iter_texts(tree.find("**/*.cs")):
        class_match = _CLASS.search(content)
        split = class_match.start() if class_match else 0
        base_match = _CLASS_ROUTE.search(content, 0, split) if split else None
        token = _controller_token(class_match.group(1) if class_match else None)
        base = base_match.group(1).replace("[controller]", token.lower()) if base_match else ""
        for match in _HTTP_ATTRIBUTE.finditer(content, split):
            routes.append(
                Route(
                    method=match.group(1).upper(),
                    path=_with_slash(join_paths(base, match.group(2) or "")),
                    file=file,
                    handler=next_name(_METHOD_NAME, content, match.end()),
                )
            )
        for match in _MINIMAL_API.finditer(content):
            routes.append(
                Route(
                    method=match.group(1).upper(),
                    path=_with_slash(match.group(2)),
                    file=file,
                    handler=match.group(3),
                )
            )
    return routes


def extract_ef_models(tree: SourceTree) -> List[Model]:
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find("**/*.cs")):
        if file.endswith(("Controller.cs", "Program.cs", "Startup.cs")):
            continue
        for match in _PUBLIC_CLASS.finditer(content):
            body = balanced_span(content, match.end() - 1)
            if body is None:
                continue
            fields = tuple(ModelField(name, kind) for kind, name in _PROPERTY.findall(body))
            if fields:
                models.append(Model(name=match.group(1), fields=fields, file=file))
    return models


def _public_methods(content: str, class_name: str) -> tuple[str, ...]:
    return unique(name for name in _PUBLIC_METHOD.findall(content) if name != class_name)


def extract_dotnet_controllers(tree: SourceTree) -> List[Controller]:
    controllers: List[Controller] = []
    for file, content in tree.iter_texts(tree.find("**/*Controller.cs")):
        name = stem(file, ".cs")
        controllers.append(Controller(name=name, actions=_public_methods(content, name), file=file))
    return controllers


def extract_csharp_services(tree: SourceTree) -> List[Service]:
    services: List[Service] = []
    for file, content in tree.iter_texts(tree.find("**/*Service.cs", "**/Services/*.cs")):
        name = stem(file, ".cs")
        functions = _public_methods(content, name)
        if functions:
            services.append(Service(name=name, functions=functions, file=file))
    return services


def read_csproj(tree: SourceTree) -> dict:
    projects = [path for path in tree.files if path.endswith(".csproj")]
    if not projects:
        return {"type": "csharp"}
    return {"app_name": stem(projects[0], ".csproj"), "type": "csharp"}


__all__ = [
    "extract_csharp_services",
    "extract_dotnet_controllers",
    "extract_dotnet_routes",
    "extract_ef_models",
    "read_csproj",
]
