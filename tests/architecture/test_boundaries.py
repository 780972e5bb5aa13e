from pytest_archon import archrule


def test_core_independence() -> None:
    """
    Core should not import from specifications or any persistence adapter.
    It is the foundation and must remain independent.
    """
    (
        archrule("core_is_independent")
        .match("rest_ddd_core*")
        .should_not_import("rest_ddd_specifications*")
        .should_not_import("rest_ddd_persistence_http*")
        .check("rest_ddd_core")
    )


def test_specifications_layering() -> None:
    """
    Specifications depend on Core only. They describe conditions and never
    know how a backend renders them.
    """
    (
        archrule("specifications_layering")
        .match("rest_ddd_specifications*")
        .should_not_import("rest_ddd_persistence_http*")
        .should_not_import("httpx*")
        .check("rest_ddd_specifications")
    )


def test_domain_isolation() -> None:
    """
    Domain layer should be self-contained.
    It must not import from ports.
    """
    (
        archrule("domain_isolation")
        .match("rest_ddd_core.domain*")
        .should_not_import("rest_ddd_core.ports*")
        .check("rest_ddd_core")
    )


def test_primitives_isolation() -> None:
    """
    Primitives layer is the lowest level.
    It must not import from domain or ports.
    """
    (
        archrule("primitives_isolation")
        .match("rest_ddd_core.primitives*")
        .should_not_import("rest_ddd_core.domain*")
        .should_not_import("rest_ddd_core.ports*")
        .check("rest_ddd_core")
    )


def test_core_has_no_transport() -> None:
    """
    Only the HTTP persistence package talks to the network.
    """
    (
        archrule("core_has_no_transport")
        .match("rest_ddd_core*")
        .should_not_import("httpx*")
        .check("rest_ddd_core")
    )


def test_request_rendering_is_transport_free() -> None:
    """
    Compiling, rendering and parsing are pure. Only the transport module
    imports the HTTP client.
    """
    (
        archrule("rendering_is_transport_free")
        .match("rest_ddd_persistence_http.compiler")
        .match("rest_ddd_persistence_http.request")
        .match("rest_ddd_persistence_http.parser")
        .match("rest_ddd_persistence_http.paginator")
        .match("rest_ddd_persistence_http.errors")
        .should_not_import("httpx*")
        .check("rest_ddd_persistence_http", only_direct_imports=True)
    )
