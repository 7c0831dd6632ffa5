"""Lookup tables mapping a detected stack to one extractor per category."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from . import extractors as ex
from .extractors import Extractor, SourceTree

Key = Tuple[str, Optional[str]]
ConfigReader = Callable[[SourceTree], dict]

_JS = ("javascript", "typescript")


def _for_languages(languages: Tuple[str, ...], framework: Optional[str], extractor: Extractor) -> Dict[Key, Extractor]:
    return {(language, framework): extractor for language in languages}


ROUTES: Dict[Key, Extractor] = {
    ("elixir", "phoenix"): ex.extract_phoenix_routes,
    ("python", "django"): ex.extract_django_routes,
    ("python", "flask"): ex.extract_flask_routes,
    ("python", "fastapi"): ex.extract_fastapi_routes,
    **_for_languages(_JS, "express", ex.extract_node_routes),
    **_for_languages(_JS, "fastify", ex.extract_node_routes),
    **_for_languages(_JS, "hono", ex.extract_node_routes),
    **_for_languages(_JS, "nextjs", ex.extract_nextjs_routes),
    **_for_languages(_JS, "nuxt", ex.extract_nuxt_routes),
    **_for_languages(_JS, "svelte", ex.extract_sveltekit_routes),
    ("ruby", "rails"): ex.extract_rails_routes,
    ("go", "gin"): ex.extract_go_routes,
    ("go", "echo"): ex.extract_go_routes,
    ("go", "fiber"): ex.extract_go_routes,
    ("go", "gorilla"): ex.extract_go_routes,
    ("java", "spring"): ex.extract_spring_routes,
    ("java", "quarkus"): ex.extract_jaxrs_routes,
    ("java", "micronaut"): ex.extract_micronaut_routes,
    ("php", "laravel"): ex.extract_laravel_routes,
    ("php", "symfony"): ex.extract_symfony_routes,
    ("rust", "actix"): ex.extract_actix_routes,
    ("rust", "axum"): ex.extract_axum_routes,
    ("rust", "rocket"): ex.extract_rust_attribute_routes,
    ("csharp", "dotnet"): ex.extract_dotnet_routes,
}

MODELS: Dict[Key, Extractor] = {
    ("elixir", None): ex.extract_ecto_models,
    ("python", "django"): ex.extract_django_models,
    ("python", None): ex.extract_python_models,
    ("javascript", None): ex.extract_js_models,
    ("typescript", None): ex.extract_ts_models,
    ("ruby", "rails"): ex.extract_rails_models,
    ("go", None): ex.extract_go_models,
    ("java", None): ex.extract_jpa_models,
    ("php", "laravel"): ex.extract_eloquent_models,
    ("rust", None): ex.extract_rust_models,
    ("csharp", None): ex.extract_ef_models,
}

CONTROLLERS: Dict[Key, Extractor] = {
    ("elixir", "phoenix"): ex.extract_phoenix_controllers,
    ("python", "django"): ex.extract_django_views,
    ("python", "flask"): ex.extract_python_handlers,
    ("python", "fastapi"): ex.extract_python_handlers,
    **_for_languages(_JS, "express", ex.extract_express_handlers),
    ("ruby", "rails"): ex.extract_rails_controllers,
    ("go", None): ex.extract_go_handlers,
    ("java", "spring"): ex.extract_spring_controllers,
    ("php", "laravel"): ex.extract_laravel_controllers,
    ("php", "symfony"): ex.extract_symfony_controllers,
    ("csharp", "dotnet"): ex.extract_dotnet_controllers,
}

COMPONENTS: Dict[Key, Extractor] = {
    ("elixir", "phoenix"): ex.extract_phoenix_components,
    **_for_languages(_JS, "react", ex.extract_react_components),
    **_for_languages(_JS, "nextjs", ex.extract_react_components),
    **_for_languages(_JS, "vue", ex.extract_vue_components),
    **_for_languages(_JS, "nuxt", ex.extract_vue_components),
    **_for_languages(_JS, "svelte", ex.extract_svelte_components),
    ("ruby", "rails"): ex.extract_rails_views,
}

SERVICES: Dict[Key, Extractor] = {
    ("elixir", None): ex.extract_elixir_contexts,
    ("python", None): ex.extract_python_services,
    ("javascript", None): ex.extract_js_services,
    ("typescript", None): ex.extract_js_services,
    ("ruby", None): ex.extract_ruby_services,
    ("go", None): ex.extract_go_services,
    ("java", None): ex.extract_java_services,
    ("php", None): ex.extract_php_services,
    ("csharp", None): ex.extract_csharp_services,
}

CONFIG: Dict[Key, ConfigReader] = {
    ("elixir", None): ex.read_mix_config,
    ("python", None): ex.read_python_config,
    ("javascript", None): ex.read_package_json,
    ("typescript", None): ex.read_package_json,
    ("ruby", None): ex.read_ruby_config,
    ("go", None): ex.read_go_config,
    ("java", None): ex.read_java_config,
    ("php", None): ex.read_composer_json,
    ("rust", None): ex.read_cargo_toml,
    ("csharp", None): ex.read_csproj,
}

TABLES: Dict[str, Dict[Key, Extractor]] = {
    "routes": ROUTES,
    "models": MODELS,
    "controllers": CONTROLLERS,
    "components": COMPONENTS,
    "services": SERVICES,
}

# Only routes have a universal fallback; every other category yields nothing.
FALLBACKS: Dict[str, Extractor] = {
    "routes": ex.extract_generic_routes,
}


def _no_records(tree: SourceTree) -> list:
    return []


def _no_config(tree: SourceTree) -> dict:
    return {}


def resolve_extractor(category: str, language: str, framework: Optional[str]) -> Extractor:
    """Return the extractor for ``category``: exact pair, then language default, then fallback."""
    try:
        table = TABLES[category]
    except KeyError as exc:
        raise ValueError(f"Unknown extraction category: {category}") from exc
    for key in ((language, framework), (language, None)):
        extractor = table.get(key)
        if extractor is not None:
            return extractor
    return FALLBACKS.get(category, _no_records)


def resolve_config_reader(language: str) -> ConfigReader:
    return CONFIG.get((language, None), _no_config)


__all__ = [
    "CONFIG",
    "COMPONENTS",
    "CONTROLLERS",
    "MODELS",
    "ROUTES",
    "SERVICES",
    "TABLES",
    "resolve_config_reader",
    "resolve_extractor",
]
