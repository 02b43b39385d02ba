"""
OpenAPI document assembly.

Combines route metadata, handler information, component schemas and
security schemes into one OpenAPI document. A build either produces a
complete document or raises; partial documents are never returned.
"""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from http import HTTPStatus
from typing import Any, Optional

from openapi_autodoc.analyzer.constraints import SchemaConstraintMapper
from openapi_autodoc.analyzer.handler_inspector import HandlerInspector
from openapi_autodoc.config import Config
from openapi_autodoc.errors import OpenAPIAutodocError, RouteBuildError
from openapi_autodoc.generator.schemas import ComponentSchemas, schema_ref
from openapi_autodoc.generator.security import SecuritySchemeRegistry, resolve_security_scheme
from openapi_autodoc.models.handler import HandlerInfo
from openapi_autodoc.models.route import RouteInfo
from openapi_autodoc.models.schema import FieldLocation
from openapi_autodoc.parser.source_cache import SourceCache

logger = logging.getLogger(__name__)

DEFAULT_ERROR_RESPONSES = (
    (HTTPStatus.BAD_REQUEST, "Request body contains invalid data"),
    (HTTPStatus.UNPROCESSABLE_ENTITY, "Request body could not be processed"),
    (HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error"),
)

AUTH_ERROR_RESPONSES = (
    (HTTPStatus.UNAUTHORIZED, "Authorization failed"),
    (HTTPStatus.FORBIDDEN, "Access denied"),
)

ERROR_SCHEMA_NAME = "ErrorResponse"


def effective_status(route: RouteInfo, info: HandlerInfo) -> int:
    """Explicit or derived status, else 204 without a response body and 200 with one."""
    if info.status_code:
        return info.status_code
    if route.response_body is None:
        return HTTPStatus.NO_CONTENT.value
    return HTTPStatus.OK.value


def _reason_phrase(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return "Successful response"


class SpecificationAssembler:
    """
    Build OpenAPI documents from routes.

    Every build gets a fresh SourceCache unless one is passed in.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        """
        Initialize the assembler.

        Args:
            config: Configuration, defaults if None.
        """
        self.config = config or Config()
        self.mapper = SchemaConstraintMapper()

    def build_document(
        self,
        title: str,
        version: str,
        routes: Iterable[RouteInfo],
        cache: Optional[SourceCache] = None,
    ) -> dict[str, Any]:
        """
        Build the OpenAPI document of a set of routes.

        Args:
            title: Document title.
            version: Document version.
            routes: Routes in registration order.
            cache: Source cache for this build, a new one if None.

        Returns:
            The document as plain data.

        Raises:
            RouteBuildError: If any route cannot be documented.
        """
        routes = list(routes)
        self._check_duplicates(routes)

        inspector = HandlerInspector(cache if cache is not None else SourceCache(), self.config)
        infos = self._inspect_all(inspector, routes)

        schemas = ComponentSchemas(self.mapper)
        schemas.register_error_schemas()
        security = SecuritySchemeRegistry()
        operation_ids: dict[str, int] = {}
        paths: dict[str, dict[str, Any]] = {}

        for route, info in zip(routes, infos):
            try:
                operation = self.build_operation(route, info, schemas, security)
            except OpenAPIAutodocError as e:
                raise RouteBuildError(route.identifier, e) from e

            operation["operationId"] = self._unique_operation_id(
                operation["operationId"], operation_ids, route
            )
            paths.setdefault(route.path, {})[route.method.value.lower()] = operation

        components: dict[str, Any] = {"schemas": schemas.schemas}
        if security:
            components["securitySchemes"] = security.to_dict()

        return {
            "openapi": self.config.generator.openapi_version,
            "info": {"title": title, "version": version},
            "paths": paths,
            "components": components,
        }

    def generate(
        self,
        title: str,
        version: str,
        routes: Iterable[RouteInfo],
        output_format: Optional[str] = None,
    ) -> str:
        """
        Build and serialize a document.

        Args:
            title: Document title.
            version: Document version.
            routes: Routes in registration order.
            output_format: Formatter name, the configured one if None.

        Returns:
            The serialized document.
        """
        from openapi_autodoc.output.formatters import get_formatter

        document = self.build_document(title, version, routes)
        formatter = get_formatter(
            output_format or self.config.output.format,
            indent=self.config.output.indent,
        )
        return formatter.format(document)

    def inspect_routes(self, routes: Iterable[RouteInfo]) -> list[HandlerInfo]:
        """Resolve the HandlerInfo of every route with a fresh cache."""
        return self._inspect_all(HandlerInspector(SourceCache(), self.config), list(routes))

    def build_operation(
        self,
        route: RouteInfo,
        info: HandlerInfo,
        schemas: ComponentSchemas,
        security: SecuritySchemeRegistry,
    ) -> dict[str, Any]:
        """
        Build the operation object of one route.

        Args:
            route: The route.
            info: The route handler's information.
            schemas: Component schemas of the document.
            security: Security schemes of the document.

        Returns:
            The operation object.
        """
        operation: dict[str, Any] = {
            "operationId": info.identifier,
            "tags": list(info.tags),
            "summary": info.summary,
        }
        if info.description:
            operation["description"] = info.description
        if info.deprecated:
            operation["deprecated"] = True

        if route.params is not None:
            parameters = self._parameters(route, schemas)
            if parameters:
                operation["parameters"] = parameters

        if route.request_body is not None:
            operation["requestBody"] = {
                "required": True,
                "content": {
                    route.accepts: {"schema": schemas.register(route.request_body, route.identifier)},
                },
            }

        status = effective_status(route, info)
        success: dict[str, Any] = {"description": _reason_phrase(status)}
        if route.response_body is not None:
            success["content"] = {
                route.produces: {"schema": schemas.register(route.response_body, route.identifier)},
            }

        responses: dict[str, Any] = {str(status): success}
        for code, description in DEFAULT_ERROR_RESPONSES:
            responses[str(code.value)] = self._error_response(description)
        for error in info.errors:
            responses[str(error.code)] = self._error_response(error.message)

        if route.auth_handler is not None:
            scheme = resolve_security_scheme(route.auth_handler)
            if scheme is None:
                logger.warning(
                    "Auth handler of %s does not describe a security scheme, documenting it as public",
                    route.identifier,
                )
            else:
                operation["security"] = [{security.register(scheme): []}]
                for code, description in AUTH_ERROR_RESPONSES:
                    responses[str(code.value)] = self._error_response(description)

        operation["responses"] = responses
        return operation

    def _parameters(self, route: RouteInfo, schemas: ComponentSchemas) -> list[dict[str, Any]]:
        parameters: list[dict[str, Any]] = []

        for field in route.params.fields:
            location = field.location or FieldLocation.QUERY
            if location is FieldLocation.BODY:
                logger.warning(
                    "Skipping body field %s in the parameters of %s", field.name, route.identifier
                )
                continue

            schema = schemas.field_schema(field, route.identifier, annotate=False)
            constraint = self.mapper.apply(field, schema, route=route.identifier)

            parameter: dict[str, Any] = {
                "name": field.name,
                "in": location.value,
                "required": constraint.required or location is FieldLocation.PATH,
            }
            if field.description:
                parameter["description"] = field.description
            parameter["schema"] = schema
            if field.example is not None:
                parameter["example"] = field.example
            parameters.append(parameter)

        return parameters

    def _error_response(self, description: str) -> dict[str, Any]:
        return {
            "description": description,
            "content": {
                self.config.generator.default_media_type: {"schema": schema_ref(ERROR_SCHEMA_NAME)},
            },
        }

    def _inspect_all(self, inspector: HandlerInspector, routes: list[RouteInfo]) -> list[HandlerInfo]:
        workers = self.config.generator.workers
        if workers <= 1 or len(routes) <= 1:
            return [self._inspect_route(inspector, route) for route in routes]

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="openapi-autodoc") as pool:
            futures = [pool.submit(self._inspect_route, inspector, route) for route in routes]
            return [future.result() for future in futures]

    def _inspect_route(self, inspector: HandlerInspector, route: RouteInfo) -> HandlerInfo:
        try:
            return inspector.inspect(route)
        except OpenAPIAutodocError as e:
            raise RouteBuildError(route.identifier, e) from e

    def _check_duplicates(self, routes: list[RouteInfo]) -> None:
        seen: set[tuple[str, str]] = set()
        for route in routes:
            key = (route.method.value, route.path)
            if key in seen:
                raise RouteBuildError(route.identifier, ValueError("route registered twice"))
            seen.add(key)

    def _unique_operation_id(
        self,
        operation_id: str,
        seen: dict[str, int],
        route: RouteInfo,
    ) -> str:
        count = seen.get(operation_id, 0) + 1
        seen[operation_id] = count
        if count == 1:
            return operation_id

        unique = f"{operation_id}-{count}"
        while unique in seen:
            count += 1
            unique = f"{operation_id}-{count}"
        seen[operation_id] = count
        seen[unique] = 1
        logger.warning(
            "Operation id %s is already used, %s gets %s", operation_id, route.identifier, unique
        )
        return unique


def generate_documentation(
    title: str,
    version: str,
    routes: Iterable[RouteInfo],
    output_format: str = "json",
    config: Optional[Config] = None,
) -> str:
    """
    Generate a serialized OpenAPI document.

    Args:
        title: Document title.
        version: Document version.
        routes: Routes in registration order.
        output_format: "json", "yaml" or "html".
        config: Configuration, defaults if None.

    Returns:
        The serialized document.

    Raises:
        RouteBuildError: If any route cannot be documented.
    """
    return SpecificationAssembler(config).generate(title, version, routes, output_format)
