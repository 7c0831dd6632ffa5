"""Django, Flask, FastAPI and plain Python extractors."""

from __future__ import annotations

import re
import tomllib
from typing import List, Optional

from ..models import Controller, Model, ModelField, Route, Service
from .core import MAX_FIELDS, SourceTree, indented_block, is_dunder, method_list, next_name, stem, unique

_DJANGO_PATH = re.compile(
    r"\b(?:re_)?path\s*\(\s*r?(['\"])(.*?)\1(?:\s*,\s*([\w.]+))?"
)
_FLASK_ROUTE = re.compile(
    r"@\w+\.route\s*\(\s*(['\"])(.*?)\1(?P<args>[^)]*)\)"
)
_VERB_DECORATOR = re.compile(
    r"@\w+\.(get|post|put|patch|delete)\s*\(\s*(['\"])(.*?)\2"
)
_NEXT_DEF = re.compile(r"(?:async\s+)?def\s+(\w+)\s*\(")
_DEF = re.compile(r"^\s*(?:async\s+)?def\s+(\w+)\s*\(", re.MULTILINE)

_DJANGO_MODEL = re.compile(r"^class\s+(\w+)\s*\(\s*(?:models\.Model|Model)\b[^)]*\)\s*:", re.MULTILINE)
_DJANGO_FIELD = re.compile(r"^\s+(\w+)\s*=\s*models\.(\w+)\s*\(", re.MULTILINE)
_NON_FIELD_ATTRS = {"Manager", "Index", "UniqueConstraint", "CheckConstraint", "Q", "F"}

_CLASS = re.compile(r"^class\s+(\w+)\s*(?:\([^)]*\))?\s*:", re.MULTILINE)
_ANNOTATED = re.compile(
    r"^[ \t]+(\w+)\s*:\s*([\w.]+(?:\[[^\]\n]*\])?(?:\s*\|\s*[\w.]+(?:\[[^\]\n]*\])?)*)",
    re.MULTILINE,
)
_DOCSTRING = re.compile(r"(\"\"\"|''')[\s\S]*?\1")

_HANDLER_PATTERNS = (
    "**/routes.py",
    "**/routers/*.py",
    "**/endpoints/*.py",
    "**/api/*.py",
)


def _django_handler(name: Optional[str]) -> Optional[str]:
    # include(...) mounts another urlconf rather than naming a view.
    return None if name == "include" else name


def extract_django_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in tree.iter_texts(tree.find("**/urls.py")):
        for match in _DJANGO_PATH.finditer(content):
            routes.append(
                Route(
                    method="GET",
                    path="/" + match.group(2),
                    file=file,
                    handler=_django_handler(match.group(3)),
                )
            )
    return routes


def extract_flask_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in tree.iter_texts(tree.find("**/*.py")):
        for match in _FLASK_ROUTE.finditer(content):
            args = match.group("args")
            methods_arg = re.search(r"methods\s*=\s*[\[(]([^\])]*)", args)
            methods = method_list(methods_arg.group(1)) if methods_arg else ["GET"]
            handler = next_name(_NEXT_DEF, content, match.end())
            for method in methods:
                routes.append(Route(method=method, path=match.group(2), file=file, handler=handler))
        routes.extend(_verb_decorator_routes(file, content))
    return routes


def extract_fastapi_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in tree.iter_texts(tree.find("**/*.py")):
        routes.extend(_verb_decorator_routes(file, content))
    return routes


def _verb_decorator_routes(file: str, content: str) -> List[Route]:
    return [
        Route(
            method=match.group(1).upper(),
            path=match.group(3),
            file=file,
            handler=next_name(_NEXT_DEF, content, match.end()),
        )
        for match in _VERB_DECORATOR.finditer(content)
    ]


def extract_django_models(tree: SourceTree) -> List[Model]:
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find("**/models.py", "**/models/*.py")):
        for match in _DJANGO_MODEL.finditer(content):
            body = indented_block(content, match.end())
            fields = tuple(
                ModelField(name, kind)
                for name, kind in _DJANGO_FIELD.findall(body)
                if kind not in _NON_FIELD_ATTRS
            )
            models.append(Model(name=match.group(1), fields=fields, file=file))
    return models


def extract_python_models(tree: SourceTree) -> List[Model]:
    """Dataclasses, pydantic models and other classes with annotated attributes."""
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find("**/*.py")):
        for match in _CLASS.finditer(content):
            body = indented_block(content, match.end())
            fields = tuple(
                ModelField(name, kind.strip())
                for name, kind in _ANNOTATED.findall(_top_level_lines(body))
            )[:MAX_FIELDS]
            if fields:
                models.append(Model(name=match.group(1), fields=fields, file=file))
    return models


def _top_level_lines(body: str) -> str:
    """Keep only the class-level statements of an indented body."""
    lines = _DOCSTRING.sub("", body).splitlines()
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    if not indents:
        return ""
    base = min(indents)
    return "\n".join(
        line for line in lines if line.strip() and len(line) - len(line.lstrip()) == base
    )


def extract_django_views(tree: SourceTree) -> List[Controller]:
    return _python_controllers(tree, tree.find("**/views.py", "**/views/*.py"))


def extract_python_handlers(tree: SourceTree) -> List[Controller]:
    """Flask and FastAPI handler modules: views plus router/endpoint modules."""
    return _python_controllers(
        tree, tree.find("**/views.py", "**/views/*.py", *_HANDLER_PATTERNS)
    )


def _python_controllers(tree: SourceTree, files: List[str]) -> List[Controller]:
    controllers: List[Controller] = []
    for file, content in tree.iter_texts(files):
        if file.endswith("__init__.py"):
            continue
        actions = unique(name for name in _DEF.findall(content) if not is_dunder(name))
        controllers.append(Controller(name=stem(file, ".py"), actions=actions, file=file))
    return controllers


def extract_python_services(tree: SourceTree) -> List[Service]:
    services: List[Service] = []
    files = tree.find("**/services/*.py", "**/service.py", "**/services.py")
    for file, content in tree.iter_texts(files):
        functions = unique(name for name in _DEF.findall(content) if not name.startswith("_"))
        if functions:
            services.append(Service(name=stem(file, ".py"), functions=functions, file=file))
    return services


def read_python_config(tree: SourceTree) -> dict:
    if tree.exists("pyproject.toml"):
        content = tree.read("pyproject.toml")
        if content is None:
            return {}
        return {"app_name": _pyproject_name(content), "type": "python"}
    if tree.exists("setup.py"):
        return {"type": "python"}
    return {}


def _pyproject_name(content: str) -> str:
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError:
        match = re.search(r"name\s*=\s*\"([^\"]+)\"", content)
        return match.group(1) if match else "unknown"
    project = data.get("project")
    if isinstance(project, dict) and isinstance(project.get("name"), str):
        return project["name"]
    tool = data.get("tool")
    poetry = tool.get("poetry") if isinstance(tool, dict) else None
    if isinstance(poetry, dict) and isinstance(poetry.get("name"), str):
        return poetry["name"]
    return "unknown"


__all__ = [
    "extract_django_models",
    "extract_django_routes",
    "extract_django_views",
    "extract_fastapi_routes",
    "extract_flask_routes",
    "extract_python_handlers",
    "extract_python_models",
    "extract_python_services",
    "read_python_config",
]
