"""Tests for Phoenix and Elixir extractors."""

from __future__ import annotations

from codeingest.extractors import (
    extract_ecto_models,
    extract_elixir_contexts,
    extract_phoenix_components,
    extract_phoenix_controllers,
    extract_phoenix_routes,
    read_mix_config,
)
from codeingest.models import ModelField, Route
from tests._fixtures.repo_builder import RepoBuilder


def test_phoenix_routes_are_deduplicated_with_handlers(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "lib/app_web/router.ex": """
            defmodule AppWeb.Router do
              use AppWeb, :router

              scope "/", AppWeb do
                pipe_through :browser
                get "/users", UserController, :index
                post "/users", UserController, :create
                live "/dashboard", DashboardLive
                get "/users", UserController, :index
              end
            end
            """,
        }
    )

    routes = extract_phoenix_routes(repo_builder.tree())

    assert routes == [
        Route("GET", "/users", "lib/app_web/router.ex", "UserController.index"),
        Route("POST", "/users", "lib/app_web/router.ex", "UserController.create"),
        Route("LIVE", "/dashboard", "lib/app_web/router.ex", "DashboardLive"),
    ]


def test_ecto_schema_fields_and_associations(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "lib/app/accounts/user.ex": """
            defmodule App.Accounts.User do
              use Ecto.Schema

              schema "users" do
                field :name, :string
                field :email, :string
                field :age, :integer
                has_many :posts, App.Blog.Post
                timestamps()
              end
            end
            """,
        }
    )

    [model] = extract_ecto_models(repo_builder.tree())

    assert model.name == "App.Accounts.User"
    assert model.fields == (
        ModelField("name", "string"),
        ModelField("email", "string"),
        ModelField("age", "integer"),
        ModelField("posts", "has_many"),
    )


def test_controllers_components_and_contexts(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "lib/app_web/controllers/user_controller.ex": """
            defmodule AppWeb.UserController do
              def index(conn, _params), do: render(conn, :index)
              def show(conn, %{"id" => id}), do: render(conn, :show, id: id)
              defp helper(conn), do: conn
            end
            """,
            "lib/app_web/live/dashboard_live.ex": """
            defmodule AppWeb.DashboardLive do
              use AppWeb, :live_view
              attr :title, :string

              def handle_event("refresh", _params, socket), do: {:noreply, socket}
            end
            """,
            "lib/app/accounts.ex": """
            defmodule App.Accounts do
              def list_users do
                []
              end

              def get_user!(id), do: id
            end
            """,
            "lib/app/repo.ex": """
            defmodule App.Repo do
              def init(_type, config), do: {:ok, config}
            end
            """,
        }
    )
    tree = repo_builder.tree()

    [controller] = extract_phoenix_controllers(tree)
    assert controller.name == "AppWeb.UserController"
    assert controller.actions == ("index", "show")

    [component] = extract_phoenix_components(tree)
    assert component.props == ("title",)
    assert component.events == ("refresh",)

    [context] = extract_elixir_contexts(tree)
    assert context.name == "App.Accounts"
    assert context.functions == ("list_users", "get_user!")


def test_mix_config_reads_app_atom(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"mix.exs": "def project do\n  [app: :trainer, version: \"0.1.0\"]\nend\n"})

    assert read_mix_config(repo_builder.tree()) == {"app_name": "trainer", "type": "elixir"}
