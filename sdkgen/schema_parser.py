"""Map OpenAPI schemas to TypeScript types and describe operations.

Handles:
- Primitive, array and $ref schemas (integer -> number, T[] for arrays)
- Nullable schemas and nullable responses (204 / no content)
- Path, query and path-level parameters, with $ref resolution
- JSON request bodies
- Choosing how a 200 response body is decoded
"""

from __future__ import annotations

import logging
from typing import Any

from .loader import ref_name, resolve_ref

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
NULLABLE_MARKER = "?"

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_PRIMITIVES = {"string", "number", "boolean", "object", "any", "null"}

# How the generated code decodes a successful response
BODY_TEXT = "text"
BODY_NUMBER = "number"
BODY_BOOLEAN = "boolean"
BODY_JSON = "json"
BODY_NONE = "none"

_BODY_KINDS: dict[str, str] = {
    "string": BODY_TEXT,
    "number": BODY_NUMBER,
    "integer": BODY_NUMBER,
    "boolean": BODY_BOOLEAN,
}


def map_type(schema: dict[str, Any] | None) -> str:
    """Map an OpenAPI schema to a TypeScript type expression."""
    if not schema:
        return "any"

    if "$ref" in schema:
        return ref_name(schema["$ref"])

    schema_type = schema.get("type")
    if schema_type is None:
        return "any"
    if schema_type == "integer":
        return "number"
    if schema_type == "array":
        return f"{map_type(schema.get('items'))}[]"
    return str(schema_type)


def is_nullable(schema: dict[str, Any] | None) -> bool:
    """Check if a schema is marked nullable."""
    return bool(schema) and schema.get("nullable") is True


def nullable_suffix(nullable: bool) -> str:
    return NULLABLE_MARKER if nullable else ""


def responses_nullable(responses: dict[str, Any]) -> bool:
    """A response set may yield null if it declares 204 or any response without content."""
    return any(
        status == "204" or not (response or {}).get("content")
        for status, response in responses.items()
    )


def jsdoc_type(type_name: str) -> str:
    """Qualify model types so JSDoc resolves them from Models.d.ts.

    'Pet[]' -> "import('./Models').Pet[]"; 'string[]' stays as is.
    """
    element = type_name
    while element.endswith("[]"):
        element = element[:-2]
    if element in _PRIMITIVES:
        return type_name
    return f"import('./Models').{type_name}"


def json_schema(content: dict[str, Any] | None) -> dict[str, Any] | None:
    """Return the application/json schema of a content map, if any."""
    if not content or JSON_CONTENT_TYPE not in content:
        return None
    return content[JSON_CONTENT_TYPE].get("schema") or {}


def get_responses(operation: dict[str, Any]) -> dict[str, Any]:
    """Responses keyed by status string (YAML may load 200 as an int)."""
    return {str(status): response for status, response in (operation.get("responses") or {}).items()}


def success_schema(operation: dict[str, Any]) -> dict[str, Any] | None:
    """Return the JSON schema of the 200 response, or None."""
    success = get_responses(operation).get("200")
    if success is None:
        return None
    return json_schema(success.get("content"))


def response_type(operation: dict[str, Any]) -> str | None:
    """Mapped type of the 200 JSON response, or None if there is none."""
    schema = success_schema(operation)
    if schema is None:
        return None
    return map_type(schema)


def body_kind(operation: dict[str, Any]) -> str:
    """Decide how generated code decodes the 200 response body."""
    schema = success_schema(operation)
    if schema is None:
        return BODY_NONE
    if "$ref" in schema:
        return BODY_JSON
    return _BODY_KINDS.get(schema.get("type"), BODY_JSON)


def has_no_content(operation: dict[str, Any]) -> bool:
    return "204" in get_responses(operation)


def request_body(spec: dict[str, Any], operation: dict[str, Any]) -> dict[str, Any] | None:
    """Return the requestBody if it carries a JSON payload."""
    body = operation.get("requestBody")
    if not body:
        return None
    if "$ref" in body:
        body = resolve_ref(spec, body["$ref"])
    if json_schema(body.get("content")) is None:
        return None
    return body


def parse_parameters(
    spec: dict[str, Any],
    path_item: dict[str, Any],
    operation: dict[str, Any],
) -> list[dict[str, Any]]:
    """Collect path-level and operation parameters in declared order.

    Operation parameters override path-level ones with the same name and location.
    """
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for raw in [*path_item.get("parameters", []), *operation.get("parameters", [])]:
        param = resolve_ref(spec, raw["$ref"]) if "$ref" in raw else raw
        if not param.get("name"):
            logger.debug("Skipping parameter without a name: %r", raw)
            continue
        schema = param.get("schema") or {}
        merged[(param["name"], param.get("in", "query"))] = {
            "name": param["name"],
            "location": param.get("in", "query"),
            "type": map_type(schema),
            "nullable": is_nullable(schema),
            "description": param.get("description", ""),
        }
    return list(merged.values())


def _describe(type_name: str, name: str, description: str | None) -> str:
    line = f"@param {{{type_name}}} {name}"
    if description:
        line += f" - {description}"
    return line


def param_doc(param: dict[str, Any]) -> str:
    type_name = jsdoc_type(param["type"]) + nullable_suffix(param["nullable"])
    return _describe(type_name, param["name"], param["description"])


def body_doc(body: dict[str, Any]) -> str:
    schema = json_schema(body.get("content"))
    optional = not body.get("required", False)
    type_name = jsdoc_type(map_type(schema)) + nullable_suffix(optional or is_nullable(schema))
    return _describe(type_name, "body", body.get("description"))


def returns_doc(operation: dict[str, Any]) -> str:
    """Build the @returns line for an operation."""
    responses = get_responses(operation)
    schema = success_schema(operation)
    if schema is None:
        return "@returns {Promise<null>}"

    type_name = jsdoc_type(map_type(schema)) + nullable_suffix(responses_nullable(responses))
    line = f"@returns {{Promise<{type_name}>}}"
    if schema.get("description"):
        line += f" - {schema['description']}"
    return line
