"""Tests for Spring, JAX-RS and Micronaut extractors."""

from __future__ import annotations

from codeingest.extractors import (
    extract_jaxrs_routes,
    extract_java_services,
    extract_jpa_models,
    extract_micronaut_routes,
    extract_spring_controllers,
    extract_spring_routes,
    read_java_config,
)
from codeingest.models import ModelField
from tests._fixtures.repo_builder import RepoBuilder

SPRING_CONTROLLER = """
package com.example.web;

@RestController
@RequestMapping("/api/users")
public class UserController {

    private final UserService service;

    public UserController(UserService service) {
        this.service = service;
    }

    @GetMapping
    public List<User> list() {
        return service.findAll();
    }

    @GetMapping("/{id}")
    public User get(@PathVariable Long id) {
        return service.find(id);
    }

    @RequestMapping(value = "/legacy", method = RequestMethod.POST)
    public void legacy() {
    }
}
"""


def test_spring_routes_join_class_base(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"src/main/java/com/example/web/UserController.java": SPRING_CONTROLLER})

    routes = extract_spring_routes(repo_builder.tree())

    assert [(route.method, route.path, route.handler) for route in routes] == [
        ("GET", "/api/users", "list"),
        ("GET", "/api/users/{id}", "get"),
        ("POST", "/api/users/legacy", "legacy"),
    ]


def test_javadoc_mentioning_class_keeps_class_mapping(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/main/java/com/example/web/UserController.java": """
            /** REST controller class for users. */
            @RestController
            @RequestMapping("/api/users")
            public class UserController {
                @GetMapping("/{id}")
                public User get(@PathVariable Long id) {
                    return null;
                }
            }
            """,
        }
    )

    routes = extract_spring_routes(repo_builder.tree())

    assert [(route.method, route.path, route.handler) for route in routes] == [("GET", "/api/users/{id}", "get")]


def test_spring_controllers_skip_constructors(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"src/main/java/com/example/web/UserController.java": SPRING_CONTROLLER})

    [controller] = extract_spring_controllers(repo_builder.tree())

    assert controller.name == "UserController"
    assert controller.actions == ("list", "get", "legacy")


def test_jpa_entities_and_services(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/main/java/com/example/domain/User.java": """
            package com.example.domain;

            @Entity
            public class User {
                @Id
                @GeneratedValue
                private Long id;

                private String name;
                private List<String> roles = new ArrayList<>();
            }
            """,
            "src/main/java/com/example/service/UserService.java": """
            @Service
            public class UserService {
                public List<User> findAll() {
                    return List.of();
                }

                private void audit() {
                }
            }
            """,
            "pom.xml": "<project><artifactId>shop</artifactId></project>\n",
        }
    )
    tree = repo_builder.tree()

    [model] = extract_jpa_models(tree)
    assert model.name == "User"
    assert model.fields == (
        ModelField("id", "Long"),
        ModelField("name", "String"),
        ModelField("roles", "List<String>"),
    )

    [service] = extract_java_services(tree)
    assert (service.name, service.functions) == ("UserService", ("findAll",))

    assert read_java_config(tree) == {"app_name": "shop", "type": "java"}


def test_jaxrs_and_micronaut_routes(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/main/java/GreetingResource.java": """
            @Path("/hello")
            public class GreetingResource {

                @GET
                @Produces(MediaType.TEXT_PLAIN)
                public String hello() {
                    return "hello";
                }

                @POST
                @Path("/{name}")
                public String greet(String name) {
                    return name;
                }
            }
            """,
            "src/main/java/BookController.java": """
            @Controller("/books")
            public class BookController {

                @Get("/{id}")
                public Book show(Long id) {
                    return null;
                }
            }
            """,
        }
    )
    tree = repo_builder.tree()

    jaxrs = [(route.method, route.path, route.handler) for route in extract_jaxrs_routes(tree)]
    assert jaxrs == [("GET", "/hello", "hello"), ("POST", "/hello/{name}", "greet")]

    micronaut = [(route.method, route.path, route.handler) for route in extract_micronaut_routes(tree)]
    assert micronaut == [("GET", "/books/{id}", "show")]
