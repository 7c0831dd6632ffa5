"""Laravel, Symfony and plain PHP extractors."""

from __future__ import annotations

import json
import re
from typing import Dict, List, Optional

from ..models import Controller, Model, ModelField, Route, Service
from .core import SourceTree, method_list, next_name, stem, unique

_RESOURCE_ACTIONS = (
    ("GET", "", "index"),
    ("GET", "/{id}", "show"),
    ("POST", "", "store"),
    ("PUT", "/{id}", "update"),
    ("DELETE", "/{id}", "destroy"),
)

_LARAVEL_VERB = re.compile(r"Route::(get|post|put|patch|delete|any)\s*\(\s*(['\"])(.*?)\2")
# Optional handler argument right after the path: a [Class::class, 'method'] pair or an 'X@m' string.
_LARAVEL_HANDLER = re.compile(r"\s*,\s*(\[[^\]]*\]|['\"][\w\\@]+['\"])")
_LARAVEL_RESOURCE = re.compile(
    r"Route::(?:api)?[Rr]esource\s*\(\s*(['\"])(.*?)\1\s*,\s*([\w\\]+)::class"
)
_CLASS_ACTION = re.compile(r"\[\s*([\w\\]+)::class\s*,\s*['\"](\w+)['\"]\s*\]")
_STRING_ACTION = re.compile(r"^['\"]([\w\\@]+)['\"]$")

_SYMFONY_ROUTE = re.compile(r"(?:#\[|@)Route\s*\(\s*(['\"])(.*?)\1(?P<args>[^)\]]*)")
_PHP_FUNCTION = re.compile(
    r"^\s*(?:(?:public|protected|private|static|final|abstract)\s+)*function\s+(\w+)\s*\(",
    re.MULTILINE,
)
_PUBLIC_FUNCTION = re.compile(
    r"^\s*(?:(?:final|abstract)\s+)?public\s+(?:static\s+)?function\s+(\w+)\s*\(",
    re.MULTILINE,
)
_ELOQUENT_CLASS = re.compile(r"class\s+(\w+)\s+extends\s+(?:Model|Authenticatable|Pivot)\b")
_FILLABLE = re.compile(r"\$fillable\s*=\s*\[([^\]]*)\]", re.DOTALL)
_CASTS = re.compile(r"\$casts\s*=\s*\[([^\]]*)\]", re.DOTALL)
_CASTS_METHOD = re.compile(r"function\s+casts\s*\([^)]*\)[^{]*\{[^\[]*\[([^\]]*)\]", re.DOTALL)
_CAST_ENTRY = re.compile(r"['\"](\w+)['\"]\s*=>\s*['\"]?([\w:\\]+)")


def _laravel_handler(content: str, position: int) -> Optional[str]:
    argument = _LARAVEL_HANDLER.match(content, position)
    if not argument:
        return None
    raw = argument.group(1)
    class_action = _CLASS_ACTION.match(raw)
    if class_action:
        controller = class_action.group(1).split("\\")[-1]
        return f"{controller}@{class_action.group(2)}"
    string_action = _STRING_ACTION.match(raw)
    if string_action:
        return string_action.group(1)
    return None


def extract_laravel_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in tree.iter_texts(tree.find("routes/*.php")):
        for match in _LARAVEL_VERB.finditer(content):
            routes.append(
                Route(
                    method=match.group(1).upper(),
                    path=_leading_slash(match.group(3)),
                    file=file,
                    handler=_laravel_handler(content, match.end()),
                )
            )
        for match in _LARAVEL_RESOURCE.finditer(content):
            base = _leading_slash(match.group(2))
            controller = match.group(3).split("\\")[-1]
            for method, suffix, action in _RESOURCE_ACTIONS:
                routes.append(
                    Route(method=method, path=base + suffix, file=file, handler=f"{controller}@{action}")
                )
    return routes


def _leading_slash(path: str) -> str:
    return path if path.startswith("/") else "/" + path


def extract_symfony_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in tree.iter_texts(tree.find("src/**/*.php")):
        for match in _SYMFONY_ROUTE.finditer(content):
            args = match.group("args")
            methods_arg = re.search(r"methods\s*[:=]\s*[\[{]([^\]}]*)", args)
            handler = next_name(_PHP_FUNCTION, content, match.end())
            for method in method_list(methods_arg.group(1)) if methods_arg else ["GET"]:
                routes.append(Route(method=method, path=match.group(2), file=file, handler=handler))
    return routes


def extract_eloquent_models(tree: SourceTree) -> List[Model]:
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find("app/Models/**/*.php", "app/*.php")):
        match = _ELOQUENT_CLASS.search(content)
        if not match:
            continue
        casts = _casts(content)
        fillable = _FILLABLE.search(content)
        names = re.findall(r"['\"](\w+)['\"]", fillable.group(1)) if fillable else []
        fields = tuple(ModelField(name, casts.get(name, "mixed")) for name in unique(names))
        models.append(Model(name=match.group(1), fields=fields, file=file))
    return models


def _casts(content: str) -> Dict[str, str]:
    match = _CASTS.search(content) or _CASTS_METHOD.search(content)
    if not match:
        return {}
    return dict(_CAST_ENTRY.findall(match.group(1)))


def _controllers(tree: SourceTree, *patterns: str) -> List[Controller]:
    return [
        Controller(
            name=stem(file, ".php"),
            actions=unique(name for name in _PUBLIC_FUNCTION.findall(content) if not name.startswith("__")),
            file=file,
        )
        for file, content in tree.iter_texts(tree.find(*patterns))
    ]


def extract_laravel_controllers(tree: SourceTree) -> List[Controller]:
    return [
        controller
        for controller in _controllers(tree, "app/Http/Controllers/**/*.php")
        if controller.name != "Controller"
    ]


def extract_symfony_controllers(tree: SourceTree) -> List[Controller]:
    return _controllers(tree, "src/Controller/**/*.php")


def extract_php_services(tree: SourceTree) -> List[Service]:
    services: List[Service] = []
    for file, content in tree.iter_texts(tree.find("app/Services/**/*.php", "src/Service/**/*.php")):
        functions = unique(name for name in _PUBLIC_FUNCTION.findall(content) if not name.startswith("__"))
        if functions:
            services.append(Service(name=stem(file, ".php"), functions=functions, file=file))
    return services


def read_composer_json(tree: SourceTree) -> dict:
    content = tree.read("composer.json")
    if content is None:
        return {}
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return {"type": "php"}
    name = data.get("name") if isinstance(data, dict) else None
    return {"app_name": name if isinstance(name, str) else "unknown", "type": "php"}


__all__ = [
    "extract_eloquent_models",
    "extract_laravel_controllers",
    "extract_laravel_routes",
    "extract_php_services",
    "extract_symfony_controllers",
    "extract_symfony_routes",
    "read_composer_json",
]
