"""JavaScript and TypeScript extractors (Node servers, file-based routers, UI components)."""

from __future__ import annotations

import json
import re
from typing import Iterable, List, Optional, Sequence

from ..models import Component, Controller, Model, ModelField, Route, Service
from .core import (
    SourceTree,
    balanced_span,
    flatten_nested,
    quoted_strings,
    split_top_level,
    stem,
    unique,
)

_SCRIPT_EXTENSIONS = "{js,ts,mjs,cjs}"
_PAGE_EXTENSIONS = "{js,jsx,ts,tsx}"
_MAX_PROPS = 10

_NODE_ROUTE = re.compile(
    r"\b(?:app|router|server|fastify|api)\.(get|post|put|patch|delete)\s*\(\s*"
    r"(['\"`])(.*?)\2(?P<rest>[^)]*)\)"
)
_HANDLER_ARGS = re.compile(r"^(?:\s*,\s*[A-Za-z_$][\w$.]*)+\s*$")
_EXPORTED_VERB = re.compile(
    r"export\s+(?:async\s+)?(?:function|const)\s+(GET|POST|PUT|PATCH|DELETE)\b"
)
_DYNAMIC_SEGMENT = re.compile(r"\[\[?\.\.\.(\w+)\]?\]|\[(\w+)\]")
_SOURCE_EXTENSION = re.compile(r"\.(?:js|jsx|ts|tsx|vue|svelte)$")

_TS_DECLARATION = re.compile(
    r"\b(?:interface|type)\s+(\w+)\s*(?:<[^>{=]*>)?\s*(?:extends\s+[^{]+?)?\s*=?\s*\{"
)
_TS_MEMBER = re.compile(r"^(?:readonly\s+)?['\"]?(\w+)['\"]?\s*\??\s*:\s*(.+)$", re.DOTALL)
_MONGOOSE_SCHEMA = re.compile(
    r"(?:const|let|var)\s+(\w+?)Schema\s*=\s*new\s+(?:mongoose\.)?Schema\s*(?:<[^>]*>)?\s*\(\s*\{"
)
_PRISMA_MODEL = re.compile(r"^model\s+(\w+)\s*\{", re.MULTILINE)
_PRISMA_FIELD = re.compile(r"^\s*(\w+)\s+([\w\[\]?]+)")

_COMPONENT_NAME = re.compile(r"(?:function|const|class)\s+([A-Z]\w+)")
_PROPS_TYPE = re.compile(r"(?:interface|type)\s+\w*Props\s*=?\s*\{")
_PROP_ENTRY = re.compile(r"^(?:readonly\s+)?['\"]?(\w+)['\"]?\s*(?:[?:=].*)?$", re.DOTALL)

_JS_FUNCTION = re.compile(
    r"^\s*(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*(\w+)"
    r"|^\s*(?:export\s+)?(?:const|let|var)\s+(\w+)\s*(?::[^=\n]+)?=\s*(?:async\s+)?"
    r"(?:function\b|\([^)]*\)\s*(?::[^=\n]+)?=>|\w+\s*=>)"
    r"|^\s*(?:module\.)?exports\.(\w+)\s*="
    r"|^[ \t]+(?:static\s+)?(?:async\s+)?(\w+)\s*\([^)]*\)\s*(?::[^{\n]+)?\{",
    re.MULTILINE,
)
_NOT_FUNCTIONS = {
    "if",
    "for",
    "while",
    "switch",
    "catch",
    "function",
    "return",
    "constructor",
    "with",
}


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def extract_node_routes(tree: SourceTree) -> List[Route]:
    """Express, Fastify and Hono style ``receiver.verb('/path', ...)`` calls."""
    routes: List[Route] = []
    for file, content in tree.iter_texts(tree.find(f"**/*.{_SCRIPT_EXTENSIONS}")):
        for match in _NODE_ROUTE.finditer(content):
            rest = match.group("rest")
            handler = None
            if _HANDLER_ARGS.match(rest):
                handler = rest.split(",")[-1].strip()
            routes.append(
                Route(
                    method=match.group(1).upper(),
                    path=match.group(3),
                    file=file,
                    handler=handler,
                )
            )
    return routes


def file_route_path(relative: str) -> str:
    """Translate a path below a pages root into a route path.

    ``/users/[id].tsx`` becomes ``/users/:id`` and ``/blog/index.tsx`` becomes
    ``/blog``.
    """
    route = _SOURCE_EXTENSION.sub("", relative)
    if route == "index" or route.endswith("/index"):
        route = route[: -len("index")]
    route = _DYNAMIC_SEGMENT.sub(lambda m: ":" + (m.group(1) or m.group(2)), route)
    route = "/" + route.strip("/")
    return route


def _directory_route(relative_dir: str) -> str:
    segments = [
        segment
        for segment in relative_dir.split("/")
        if segment and not (segment.startswith("(") and segment.endswith(")")) and not segment.startswith("@")
    ]
    return file_route_path("/".join(segments))


def _handler_methods(content: Optional[str]) -> List[str]:
    if not content:
        return ["GET"]
    return list(unique(_EXPORTED_VERB.findall(content))) or ["GET"]


def extract_nextjs_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for root in ("pages", "src/pages"):
        for file in tree.find(f"{root}/**/*.{_PAGE_EXTENSIONS}"):
            if stem(file).startswith("_"):
                continue
            routes.append(Route(method="GET", path=file_route_path(file[len(root) :]), file=file))
    for root in ("app", "src/app"):
        files = tree.find(f"{root}/**/page.{_PAGE_EXTENSIONS}", f"{root}/**/route.{{js,ts}}")
        for file in files:
            directory = file[len(root) :].rsplit("/", 1)[0]
            path = _directory_route(directory)
            if stem(file) == "route":
                for method in _handler_methods(tree.read(file)):
                    routes.append(Route(method=method, path=path, file=file))
            else:
                routes.append(Route(method="GET", path=path, file=file))
    return routes


def extract_nuxt_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for root in ("pages", "src/pages"):
        for file in tree.find(f"{root}/**/*.vue"):
            relative = re.sub(r"(^|/)_(\w+)", r"\1[\2]", file[len(root) :])
            routes.append(Route(method="GET", path=file_route_path(relative), file=file))
    return routes


def extract_sveltekit_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    files = tree.find("src/routes/**/+page.svelte", "src/routes/**/+server.{js,ts}")
    for file in files:
        directory = file[len("src/routes") :].rsplit("/", 1)[0]
        path = _directory_route(directory)
        if stem(file) == "+server":
            for method in _handler_methods(tree.read(file)):
                routes.append(Route(method=method, path=path, file=file))
        else:
            routes.append(Route(method="GET", path=path, file=file))
    return routes


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


def extract_ts_models(tree: SourceTree) -> List[Model]:
    """TypeScript interfaces/object types plus Prisma models."""
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find("**/*.{ts,tsx}")):
        for match in _TS_DECLARATION.finditer(content):
            body = balanced_span(content, match.end() - 1)
            if body is None:
                continue
            fields = tuple(_ts_fields(flatten_nested(body)))
            if fields:
                models.append(Model(name=match.group(1), fields=fields, file=file))
    models.extend(extract_prisma_models(tree))
    return models


def extract_js_models(tree: SourceTree) -> List[Model]:
    """Mongoose schemas in JavaScript sources, then the TypeScript/Prisma scan."""
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find(f"**/*.{_SCRIPT_EXTENSIONS}")):
        for match in _MONGOOSE_SCHEMA.finditer(content):
            body = balanced_span(content, match.end() - 1)
            if body is None:
                continue
            fields = tuple(_mongoose_fields(body))
            if fields:
                name = match.group(1)
                models.append(Model(name=name[:1].upper() + name[1:], fields=fields, file=file))
    models.extend(extract_ts_models(tree))
    return models


def extract_prisma_models(tree: SourceTree) -> List[Model]:
    models: List[Model] = []
    for file, content in tree.iter_texts(tree.find("**/*.prisma")):
        for match in _PRISMA_MODEL.finditer(content):
            body = balanced_span(content, match.end() - 1)
            if body is None:
                continue
            fields: List[ModelField] = []
            for line in body.splitlines():
                stripped = line.strip()
                if not stripped or stripped.startswith(("//", "@@")):
                    continue
                field = _PRISMA_FIELD.match(line)
                if field:
                    fields.append(ModelField(field.group(1), field.group(2)))
            if fields:
                models.append(Model(name=match.group(1), fields=tuple(fields), file=file))
    return models


def _ts_fields(body: str) -> Iterable[ModelField]:
    for entry in split_top_level(body, ",;\n"):
        if entry.startswith(("//", "/*", "*")):
            continue
        member = _TS_MEMBER.match(entry)
        if not member:
            continue
        kind = member.group(2).strip()
        yield ModelField(member.group(1), "object" if kind == "{}" else kind)


def _mongoose_fields(body: str) -> Iterable[ModelField]:
    for entry in split_top_level(body, ",\n"):
        member = _TS_MEMBER.match(entry)
        if not member:
            continue
        value = member.group(2).strip()
        if value.startswith("{"):
            typed = re.search(r"\btype\s*:\s*([\w.\[\]]+)", value)
            value = typed.group(1) if typed else "Mixed"
        yield ModelField(member.group(1), value)


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def extract_react_components(tree: SourceTree) -> List[Component]:
    components: List[Component] = []
    for file, content in tree.iter_texts(tree.find("**/*.{jsx,tsx}")):
        match = _COMPONENT_NAME.search(content)
        name = match.group(1) if match else stem(file, ".jsx", ".tsx")
        components.append(Component(name=name, props=_react_props(name, content), file=file))
    return components


def _react_props(name: str, content: str) -> tuple[str, ...]:
    bodies: List[str] = []
    escaped = re.escape(name)
    signature = re.search(
        rf"function\s+{escaped}\s*(?:<[^>]*>)?\s*\(\s*\{{"
        rf"|(?:const|let)\s+{escaped}\s*(?::[^=]+)?=\s*(?:React\.)?(?:memo\(|forwardRef\()?\s*"
        rf"(?:async\s*)?(?:function\s*\w*\s*)?\(\s*\{{",
        content,
    )
    if signature:
        body = balanced_span(content, signature.end() - 1)
        if body is not None:
            bodies.append(flatten_nested(body))
    for props_type in _PROPS_TYPE.finditer(content):
        body = balanced_span(content, props_type.end() - 1)
        if body is not None:
            bodies.append(flatten_nested(body))
    return _prop_names(bodies)


def _prop_names(bodies: Sequence[str]) -> tuple[str, ...]:
    names: List[str] = []
    for body in bodies:
        for entry in split_top_level(body, ",;\n"):
            if entry.startswith(("...", "//", "/*", "*")):
                continue
            prop = _PROP_ENTRY.match(entry)
            if prop:
                names.append(prop.group(1))
    return unique(names)[:_MAX_PROPS]


def extract_vue_components(tree: SourceTree) -> List[Component]:
    components: List[Component] = []
    for file, content in tree.iter_texts(tree.find("**/*.vue")):
        props: List[str] = []
        for array in re.finditer(r"(?:props\s*:|defineProps\s*\()\s*\[([^\]]+)\]", content):
            props.extend(quoted_strings(array.group(1)))
        bodies: List[str] = []
        for opener in re.finditer(r"props\s*:\s*\{|defineProps\s*(?:<\s*|\(\s*)\{", content):
            body = balanced_span(content, opener.end() - 1)
            if body is not None:
                bodies.append(flatten_nested(body))
        props.extend(_prop_names(bodies))
        components.append(Component(name=stem(file, ".vue"), props=unique(props), file=file))
    return components


def extract_svelte_components(tree: SourceTree) -> List[Component]:
    components: List[Component] = []
    for file, content in tree.iter_texts(tree.find("**/*.svelte")):
        props: List[str] = re.findall(r"export\s+let\s+(\w+)", content)
        runes = re.search(r"let\s*\{", content)
        if runes and "$props()" in content:
            body = balanced_span(content, runes.end() - 1)
            if body is not None:
                props.extend(_prop_names([flatten_nested(body)]))
        components.append(Component(name=stem(file, ".svelte"), props=unique(props), file=file))
    return components


# ---------------------------------------------------------------------------
# Controllers and services
# ---------------------------------------------------------------------------


def _function_names(content: str) -> List[str]:
    names: List[str] = []
    for match in _JS_FUNCTION.finditer(content):
        name = next(group for group in match.groups() if group)
        if name not in _NOT_FUNCTIONS:
            names.append(name)
    return names


def _script_stem(file: str) -> str:
    return stem(file, ".js", ".ts", ".mjs", ".cjs")


def extract_express_handlers(tree: SourceTree) -> List[Controller]:
    files = tree.find(
        f"**/controllers/*.{_SCRIPT_EXTENSIONS}",
        f"**/handlers/*.{_SCRIPT_EXTENSIONS}",
        f"**/routes/*.{_SCRIPT_EXTENSIONS}",
    )
    return [
        Controller(name=_script_stem(file), actions=unique(_function_names(content)), file=file)
        for file, content in tree.iter_texts(files)
    ]


def extract_js_services(tree: SourceTree) -> List[Service]:
    files = tree.find(
        f"**/services/*.{_SCRIPT_EXTENSIONS}",
        f"**/lib/*.{_SCRIPT_EXTENSIONS}",
        f"**/utils/*.{_SCRIPT_EXTENSIONS}",
    )
    services: List[Service] = []
    for file, content in tree.iter_texts(files):
        functions = unique(name for name in _function_names(content) if not name.startswith("_"))
        if functions:
            services.append(Service(name=_script_stem(file), functions=functions, file=file))
    return services


def read_package_json(tree: SourceTree) -> dict:
    content = tree.read("package.json")
    if content is None:
        return {}
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


__all__ = [
    "extract_express_handlers",
    "extract_js_models",
    "extract_js_services",
    "extract_nextjs_routes",
    "extract_node_routes",
    "extract_nuxt_routes",
    "extract_prisma_models",
    "extract_react_components",
    "extract_svelte_components",
    "extract_sveltekit_routes",
    "extract_ts_models",
    "extract_vue_components",
    "file_route_path",
    "read_package_json",
]
