"""Spring, JAX-RS (Quarkus) and Micronaut extractors."""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from ..models import Controller, Model, ModelField, Route, Service
from .core import SourceTree, join_paths, next_name, stem, unique

_SPRING_SHORT = re.compile(
    r"@(?P<verb>Get|Post|Put|Delete|Patch)Mapping\b(?:\s*\((?P<args>[^)]*)\))?"
)
_SPRING_REQUEST_MAPPING = re.compile(r"@RequestMapping\s*\(\s*(?P<args>[^)]*)\)", re.DOTALL)
_JAXRS_VERB = re.compile(r"@(GET|POST|PUT|DELETE|PATCH)\b")
_JAXRS_PATH = re.compile(r"@Path\s*\(\s*\"([^\"]*)\"\s*\)")
_MICRONAUT_CONTROLLER = re.compile(r"@Controller\s*\(\s*(?:value\s*=\s*)?\"([^\"]*)\"")
_MICRONAUT_VERB = re.compile(r"@(Get|Post|Put|Delete|Patch)\b(?:\s*\((?P<args>[^)]*)\))?")
# Declaration lines only, so "class" inside Javadoc is ignored.
_CLASS = re.compile(
    r"^[ \t]*(?:(?:public|protected|private|abstract|final|static|open|data)\s+)*class\s+(\w+)",
    re.MULTILINE,
)

# Next method declaration; annotation lines never match because they start with "@".
_METHOD = re.compile(
    r"^\s*(?:(?:public|protected|private|static|final|synchronized|abstract)\s+)*"
    r"[\w.]+(?:<[\w<>,.?\s]*>)?(?:\[\])*\s+(\w+)\s*\(",
    re.MULTILINE,
)
_PUBLIC_METHOD = re.compile(
    r"^\s*public\s+(?:(?:static|final|synchronized|abstract)\s+)*"
    r"(?:<[\w<>,.?\s]*>\s+)?[\w.]+(?:<[\w<>,.?\s]*>)?(?:\[\])*\s+(\w+)\s*\(",
    re.MULTILINE,
)
_FIELD = re.compile(
    r"^\s*(?:(?:private|protected|public)\s+)(?:(?:final|transient)\s+)*"
    r"([\w.]+(?:<[\w<>,.?\s]*>)?(?:\[\])*)\s+(\w+)\s*(?:=[^;]*)?;",
    re.MULTILINE,
)


def _class_split(text: str) -> int:
    match = _CLASS.search(text)
    return match.start() if match else 0


def _request_path(args: Optional[str]) -> Optional[str]:
    if not args:
        return None
    named = re.search(r"(?:value|path)\s*=\s*\{?\s*(?P<quote>['\"])(?P<path>[^'\"]*)(?P=quote)", args)
    if named:
        return named.group("path")
    positional = re.search(r"^\s*\{?\s*(?P<quote>['\"])(?P<path>[^'\"]*)(?P=quote)", args)
    if positional:
        return positional.group("path")
    return None


def _request_methods(args: str) -> List[str]:
    return [verb.upper() for verb in re.findall(r"RequestMethod\.(GET|POST|PUT|DELETE|PATCH)", args)]


def _java_sources(tree: SourceTree) -> Iterator[Tuple[str, str]]:
    return tree.iter_texts(tree.find("**/*.java", "**/*.kt"))


def extract_spring_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in _java_sources(tree):
        split = _class_split(content)
        class_base = ""
        for match in _SPRING_REQUEST_MAPPING.finditer(content, 0, split):
            class_base = _request_path(match.group("args")) or ""
        for match in _SPRING_SHORT.finditer(content, split):
            routes.append(
                Route(
                    method=match.group("verb").upper(),
                    path=join_paths(class_base, _request_path(match.group("args")) or ""),
                    file=file,
                    handler=next_name(_METHOD, content, match.end()),
                )
            )
        for match in _SPRING_REQUEST_MAPPING.finditer(content, split):
            args = match.group("args")
            path = join_paths(class_base, _request_path(args) or "")
            handler = next_name(_METHOD, content, match.end())
            for verb in _request_methods(args) or ["GET"]:
                routes.append(Route(method=verb, path=path, file=file, handler=handler))
    return routes


def extract_jaxrs_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in _java_sources(tree):
        split = _class_split(content)
        base_match = _JAXRS_PATH.search(content, 0, split)
        base = base_match.group(1) if base_match else ""
        for match in _JAXRS_VERB.finditer(content, split):
            window = content[match.end() : match.end() + 300]
            handler_match = _METHOD.search(window)
            head = window[: handler_match.start()] if handler_match else window
            sub_path = _JAXRS_PATH.search(head)
            routes.append(
                Route(
                    method=match.group(1),
                    path=join_paths(base, sub_path.group(1) if sub_path else ""),
                    file=file,
                    handler=handler_match.group(1) if handler_match else None,
                )
            )
    return routes


def extract_micronaut_routes(tree: SourceTree) -> List[Route]:
    routes: List[Route] = []
    for file, content in _java_sources(tree):
        controller = _MICRONAUT_CONTROLLER.search(content)
        if not controller:
            continue
        split = _class_split(content)
        for match in _MICRONAUT_VERB.finditer(content, split):
            routes.append(
                Route(
                    method=match.group(1).upper(),
                    path=join_paths(controller.group(1), _request_path(match.group("args")) or ""),
                    file=file,
                    handler=next_name(_METHOD, content, match.end()),
                )
            )
    return routes


def extract_jpa_models(tree: SourceTree) -> List[Model]:
    models: List[Model] = []
    for file, content in _java_sources(tree):
        if "@Entity" not in content:
            continue
        match = _CLASS.search(content, content.find("@Entity"))
        if not match:
            continue
        fields = tuple(
            ModelField(name, kind)
            for kind, name in _FIELD.findall(content[match.end() :])
        )
        models.append(Model(name=match.group(1), fields=fields, file=file))
    return models


def _public_methods(content: str, class_name: str) -> Tuple[str, ...]:
    return unique(name for name in _PUBLIC_METHOD.findall(content) if name != class_name)


def extract_spring_controllers(tree: SourceTree) -> List[Controller]:
    controllers: List[Controller] = []
    for file, content in tree.iter_texts(tree.find("**/*Controller.java", "**/*Controller.kt")):
        name = stem(file, ".java", ".kt")
        controllers.append(Controller(name=name, actions=_public_methods(content, name), file=file))
    return controllers


def extract_java_services(tree: SourceTree) -> List[Service]:
    files = tree.find("**/*Service.java", "**/*ServiceImpl.java", "**/services/*.java", "**/service/*.java")
    services: List[Service] = []
    for file, content in tree.iter_texts(files):
        name = stem(file, ".java")
        functions = _public_methods(content, name)
        if functions:
            services.append(Service(name=name, functions=functions, file=file))
    return services


def read_java_config(tree: SourceTree) -> dict:
    content = tree.read("pom.xml")
    if content is None:
        return {"type": "java"}
    match = re.search(r"<artifactId>([^<]+)</artifactId>", content)
    return {"app_name": match.group(1).strip() if match else "unknown", "type": "java"}


__all__ = [
    "extract_jaxrs_routes",
    "extract_java_services",
    "extract_jpa_models",
    "extract_micronaut_routes",
    "extract_spring_controllers",
    "extract_spring_routes",
    "read_java_config",
]
