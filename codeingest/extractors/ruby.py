"""Rails and plain Ruby extractors."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..models import Component, Controller, Model, ModelField, Route, Service
from .core import SourceTree, stem, unique

ROUTES_FILE = "config/routes.rb"

# (action, method, member) in the order Rails lists resourceful routes.
_RESOURCE_ACTIONS: Sequence[Tuple[str, str, bool]] = (
    ("index", "GET", False),
    ("show", "GET", True),
    ("create", "POST", False),
    ("update", "PUT", True),
    ("destroy", "DELETE", True),
)

_RESOURCES = re.compile(r"^\s*(resources?)\s+:(\w+)(.*)$")
_EXPLICIT = re.compile(r"^\s*(get|post|put|patch|delete)\s+['\"]([^'\"]+)['\"](.*)$")
_ROOT = re.compile(r"^\s*root\s+(?:to:\s*|:to\s*=>\s*)?['\"]([^'\"]+)['\"]")
_TARGET = re.compile(r"(?:to:\s*|=>\s*)['\"]([\w/]+#\w+)['\"]")
_SYMBOLS = re.compile(r":(\w+)")

_RECORD_CLASS = re.compile(r"class\s+(\w+)\s*<\s*(?:ApplicationRecord|ActiveRecord::Base)")
_CREATE_TABLE = re.compile(r"create_table\s+['\"](\w+)['\"][^\n]*\bdo\s*\|\w+\|(.*?)^\s*end\b", re.DOTALL | re.MULTILINE)
_COLUMN = re.compile(r"^\s*\w+\.(\w+)\s+['\"](\w+)['\"]", re.MULTILINE)

_CONTROLLER_CLASS = re.compile(r"class\s+(\w+)Controller")
_DEF = re.compile(r"^\s*def\s+(self\.)?(\w+[?!]?)", re.MULTILINE)
_VISIBILITY = re.compile(r"^\s*(private|protected)\s*$", re.MULTILINE)
_LOCAL = re.compile(r"local_assigns\[:(\w+)\]|local_assigns\.fetch\(:(\w+)")


def extract_rails_routes(tree: SourceTree) -> List[Route]:
    content = tree.read(ROUTES_FILE)
    if content is None:
        return []
    routes: List[Route] = []
    for line in content.splitlines():
        resource = _RESOURCES.match(line)
        if resource:
            kind, name, options = resource.groups()
            routes.extend(_resource_routes(name, singular=kind == "resource", options=options))
            continue
        explicit = _EXPLICIT.match(line)
        if explicit:
            method, path, options = explicit.groups()
            target = _TARGET.search(options)
            routes.append(
                Route(
                    method=method.upper(),
                    path=path if path.startswith("/") else "/" + path,
                    file=ROUTES_FILE,
                    handler=target.group(1) if target else None,
                )
            )
            continue
        root = _ROOT.match(line)
        if root:
            routes.append(Route(method="GET", path="/", file=ROUTES_FILE, handler=root.group(1)))
    return routes


def _resource_routes(name: str, *, singular: bool, options: str) -> List[Route]:
    allowed = _action_filter(options)
    routes: List[Route] = []
    for action, method, member in _RESOURCE_ACTIONS:
        if singular and action == "index":
            continue
        if allowed is not None and action not in allowed:
            continue
        path = f"/{name}/:id" if member and not singular else f"/{name}"
        routes.append(Route(method=method, path=path, file=ROUTES_FILE, handler=f"{name}#{action}"))
    return routes


def _action_filter(options: str) -> Optional[set[str]]:
    only = re.search(r"only:\s*\[([^\]]*)\]|only:\s*:(\w+)", options)
    if only:
        return set(_SYMBOLS.findall(only.group(1))) if only.group(1) is not None else {only.group(2)}
    excluded = re.search(r"except:\s*\[([^\]]*)\]|except:\s*:(\w+)", options)
    if excluded:
        removed = set(_SYMBOLS.findall(excluded.group(1))) if excluded.group(1) is not None else {excluded.group(2)}
        return {action for action, _, _ in _RESOURCE_ACTIONS} - removed
    return None


def extract_rails_models(tree: SourceTree) -> List[Model]:
    columns = _schema_columns(tree)
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find("app/models/**/*.rb")):
        match = _RECORD_CLASS.search(content)
        if not match:
            continue
        name = match.group(1)
        fields = columns.get(_table_name(name), ())
        models.append(Model(name=name, fields=fields, file=file))
    return models


def _schema_columns(tree: SourceTree) -> Dict[str, Tuple[ModelField, ...]]:
    content = tree.read("db/schema.rb")
    if content is None:
        return {}
    return {
        table: tuple(ModelField(name, kind) for kind, name in _COLUMN.findall(body))
        for table, body in _CREATE_TABLE.findall(content)
    }


def _table_name(model_name: str) -> str:
    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", model_name).lower()
    if snake.endswith("y") and not snake.endswith(("ay", "ey", "oy", "uy")):
        return snake[:-1] + "ies"
    if snake.endswith(("s", "x", "ch", "sh")):
        return snake + "es"
    return snake + "s"


def _public_methods(content: str) -> List[str]:
    """Instance method names declared before the first private/protected marker."""
    cutoff = _VISIBILITY.search(content)
    public = content[: cutoff.start()] if cutoff else content
    return [name for receiver, name in _DEF.findall(public) if not receiver]


def extract_rails_controllers(tree: SourceTree) -> List[Controller]:
    controllers: List[Controller] = []
    for file, content in tree.iter_texts(tree.find("app/controllers/**/*_controller.rb")):
        match = _CONTROLLER_CLASS.search(content)
        name = match.group(1) if match else stem(file, "_controller.rb")
        lowered = name.lower()
        rejected = {"initialize", f"set_{lowered}", f"set_{lowered.rstrip('s')}"}
        actions = unique(action for action in _public_methods(content) if action not in rejected)
        controllers.append(Controller(name=name, actions=actions, file=file))
    return controllers


def extract_rails_views(tree: SourceTree) -> List[Component]:
    files = tree.find("app/views/**/*.html.erb", "app/views/**/*.html.haml", "app/views/**/*.html.slim")
    components: List[Component] = []
    for file in files:
        content = tree.read(file) or ""
        props = unique(a or b for a, b in _LOCAL.findall(content))
        name = file[len("app/views/") :].split(".html.", 1)[0]
        components.append(Component(name=name, props=props, file=file))
    return components


def extract_ruby_services(tree: SourceTree) -> List[Service]:
    services: List[Service] = []
    for file, content in tree.iter_texts(tree.find("app/services/**/*.rb", "lib/*.rb")):
        functions = unique(
            name
            for _, name in _DEF.findall(content)
            if not name.startswith("_") and name != "initialize"
        )
        if functions:
            services.append(Service(name=stem(file, ".rb"), functions=functions, file=file))
    return services


def read_ruby_config(tree: SourceTree) -> dict:
    content = tree.read("config/application.rb")
    if content is None:
        return {"type": "ruby"}
    match = re.search(r"module\s+(\w+)", content)
    return {"app_name": match.group(1) if match else "unknown", "type": "ruby"}


__all__ = [
    "extract_rails_controllers",
    "extract_rails_models",
    "extract_rails_routes",
    "extract_rails_views",
    "extract_ruby_services",
    "read_ruby_config",
]
