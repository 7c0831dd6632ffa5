"""Tests for ASP.NET Core extractors."""

from __future__ import annotations

from codeingest.extractors import (
    extract_csharp_services,
    extract_dotnet_controllers,
    extract_dotnet_routes,
    extract_ef_models,
    read_csproj,
)
from codeingest.models import ModelField
from tests._fixtures.repo_builder import RepoBuilder


def _write_project(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "Shop.Api.csproj": '<Project Sdk="Microsoft.NET.Sdk.Web"></Project>\n',
            "Controllers/UsersController.cs": """
            namespace Shop.Controllers;

            [ApiController]
            [Route("api/[controller]")]
            public class UsersController : ControllerBase
            {
                private readonly UserService _service;

                public UsersController(UserService service)
                {
                    _service = service;
                }

                [HttpGet]
                public IActionResult GetAll()
                {
                    return Ok();
                }

                [HttpGet("{id}")]
                public async Task<IActionResult> Get(int id) => Ok();

                [HttpPost]
                public IActionResult Create(User user)
                {
                    return Ok();
                }
            }
            """,
            "Models/User.cs": """
            public class User
            {
                public int Id { get; set; }
                public string Name { get; set; } = "";
                public string? Email { get; set; }
                public List<Order> Orders { get; set; } = new();
                public string Display() => Name;
            }
            """,
            "Program.cs": """
            var app = builder.Build();
            app.MapGet("/health", () => "ok");
            app.MapPost("orders", OrderHandlers.Create);
            app.Run();
            """,
            "Services/UserService.cs": """
            public class UserService
            {
                public UserService(AppDb db) {}

                public List<User> FindAll()
                {
                    return new();
                }
            }
            """,
        }
    )


def test_attribute_and_minimal_api_routes(repo_builder: RepoBuilder) -> None:
    _write_project(repo_builder)

    routes = extract_dotnet_routes(repo_builder.tree())

    assert [(route.method, route.path, route.handler) for route in routes] == [
        ("GET", "/api/users", "GetAll"),
        ("GET", "/api/users/{id}", "Get"),
        ("POST", "/api/users", "Create"),
        ("GET", "/health", None),
        ("POST", "/orders", "OrderHandlers.Create"),
    ]


def test_entity_models_read_auto_properties(repo_builder: RepoBuilder) -> None:
    _write_project(repo_builder)

    [model] = extract_ef_models(repo_builder.tree())

    assert model.name == "User"
    assert model.fields == (
        ModelField("Id", "int"),
        ModelField("Name", "string"),
        ModelField("Email", "string?"),
        ModelField("Orders", "List<Order>"),
    )


def test_controllers_services_and_project_name(repo_builder: RepoBuilder) -> None:
    _write_project(repo_builder)
    tree = repo_builder.tree()

    [controller] = extract_dotnet_controllers(tree)
    assert (controller.name, controller.actions) == ("UsersController", ("GetAll", "Get", "Create"))

    [service] = extract_csharp_services(tree)
    assert (service.name, service.functions) == ("UserService", ("FindAll",))

    assert read_csproj(tree) == {"app_name": "Shop.Api", "type": "csharp"}


def test_doc_comment_mentioning_class_keeps_route_prefix(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "Controllers/UsersController.cs": """
            /// <summary>
            /// API controller class for users.
            /// </summary>
            [ApiController]
            [Route("api/[controller]")]
            public class UsersController : ControllerBase
            {
                [HttpGet("{id}")]
                public IActionResult Get(int id) => Ok();
            }
            """,
        }
    )

    routes = extract_dotnet_routes(repo_builder.tree())

    assert [(route.path, route.handler) for route in routes] == [("/api/users/{id}", "Get")]
