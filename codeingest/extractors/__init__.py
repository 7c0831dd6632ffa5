"""Per-framework pattern extractors.

Every extractor is a plain function taking a :class:`SourceTree` and returning
a list of records. Unreadable files contribute nothing and unmatched content
yields no record.
"""

from __future__ import annotations

from .core import Extractor, SourceTree
from .csharp import extract_csharp_services, extract_dotnet_controllers, extract_dotnet_routes, extract_ef_models, read_csproj
from .elixir import (
    extract_ecto_models,
    extract_elixir_contexts,
    extract_phoenix_components,
    extract_phoenix_controllers,
    extract_phoenix_routes,
    read_mix_config,
)
from .generic import extract_generic_routes
from .go import extract_go_handlers, extract_go_models, extract_go_routes, extract_go_services, read_go_config
from .java import (
    extract_jaxrs_routes,
    extract_java_services,
    extract_jpa_models,
    extract_micronaut_routes,
    extract_spring_controllers,
    extract_spring_routes,
    read_java_config,
)
from .javascript import (
    extract_express_handlers,
    extract_js_models,
    extract_js_services,
    extract_nextjs_routes,
    extract_node_routes,
    extract_nuxt_routes,
    extract_react_components,
    extract_svelte_components,
    extract_sveltekit_routes,
    extract_ts_models,
    extract_vue_components,
    read_package_json,
)
from .php import (
    extract_eloquent_models,
    extract_laravel_controllers,
    extract_laravel_routes,
    extract_php_services,
    extract_symfony_controllers,
    extract_symfony_routes,
    read_composer_json,
)
from .python import (
    extract_django_models,
    extract_django_routes,
    extract_django_views,
    extract_fastapi_routes,
    extract_flask_routes,
    extract_python_handlers,
    extract_python_models,
    extract_python_services,
    read_python_config,
)
from .ruby import (
    extract_rails_controllers,
    extract_rails_models,
    extract_rails_routes,
    extract_rails_views,
    extract_ruby_services,
    read_ruby_config,
)
from .rust import extract_actix_routes, extract_axum_routes, extract_rust_attribute_routes, extract_rust_models, read_cargo_toml

__all__ = [
    "Extractor",
    "SourceTree",
    "extract_actix_routes",
    "extract_axum_routes",
    "extract_csharp_services",
    "extract_django_models",
    "extract_django_routes",
    "extract_django_views",
    "extract_dotnet_controllers",
    "extract_dotnet_routes",
    "extract_ecto_models",
    "extract_ef_models",
    "extract_elixir_contexts",
    "extract_eloquent_models",
    "extract_express_handlers",
    "extract_fastapi_routes",
    "extract_flask_routes",
    "extract_generic_routes",
    "extract_go_handlers",
    "extract_go_models",
    "extract_go_routes",
    "extract_go_services",
    "extract_java_services",
    "extract_jaxrs_routes",
    "extract_jpa_models",
    "extract_js_models",
    "extract_js_services",
    "extract_laravel_controllers",
    "extract_laravel_routes",
    "extract_micronaut_routes",
    "extract_nextjs_routes",
    "extract_node_routes",
    "extract_nuxt_routes",
    "extract_phoenix_components",
    "extract_phoenix_controllers",
    "extract_phoenix_routes",
    "extract_php_services",
    "extract_python_handlers",
    "extract_python_models",
    "extract_python_services",
    "extract_rails_controllers",
    "extract_rails_models",
    "extract_rails_routes",
    "extract_rails_views",
    "extract_react_components",
    "extract_ruby_services",
    "extract_rust_attribute_routes",
    "extract_rust_models",
    "extract_spring_controllers",
    "extract_spring_routes",
    "extract_svelte_components",
    "extract_sveltekit_routes",
    "extract_symfony_controllers",
    "extract_symfony_routes",
    "extract_ts_models",
    "extract_vue_components",
    "read_cargo_toml",
    "read_composer_json",
    "read_csproj",
    "read_go_config",
    "read_java_config",
    "read_mix_config",
    "read_package_json",
    "read_python_config",
    "read_ruby_config",
]
