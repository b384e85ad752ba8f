"""Group operations into modules and component schemas into models.

Every two-segment path /<module>/<function> becomes one FunctionSpec per
HTTP method, collected into the Module named by the first segment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterator

from .loader import get_paths, get_schemas
from .naming import js_identifier, split_path, to_camel_case
from .schema_parser import (
    HTTP_METHODS,
    body_doc,
    body_kind,
    has_no_content,
    is_nullable,
    map_type,
    param_doc,
    parse_parameters,
    request_body,
    response_type,
    returns_doc,
)

logger = logging.getLogger(__name__)

# Bindings every generated module declares or relies on
_MODULE_BINDINGS = frozenset({
    "extractErrorMessage", "BASE_URL", "fetch", "encodeURIComponent",
    "URLSearchParams", "JSON", "Error",
})

# Locals declared inside every generated function
_FUNCTION_LOCALS = frozenset({"url", "qs", "response", "result"})


@dataclass(frozen=True)
class FunctionSpec:
    """One generated wrapper function.

    Equality (and so deduplication) covers name, params, response_type,
    method and path only; the remaining fields just feed the templates.
    """

    name: str
    params: tuple[str, ...]
    response_type: str | None
    method: str
    path: str
    doc_lines: tuple[str, ...] = field(default=(), compare=False)
    query_params: tuple[tuple[str, str], ...] = field(default=(), compare=False)
    url_path: str = field(default="", compare=False)
    has_body: bool = field(default=False, compare=False)
    has_no_content: bool = field(default=False, compare=False)
    body_kind: str = field(default="none", compare=False)


@dataclass
class Module:
    """Functions generated from paths sharing a first segment, in first-seen order."""

    name: str
    functions: dict[FunctionSpec, None] = field(default_factory=dict)

    def __iter__(self) -> Iterator[FunctionSpec]:
        return iter(self.functions)

    def __len__(self) -> int:
        return len(self.functions)

    def add(self, function: FunctionSpec) -> bool:
        """Add a function; returns False if an equal one is already present.

        A different function that would reuse an existing name is renamed
        with its HTTP method appended (today -> todayPost), then with a
        counter (todayPost2) until the name is free.
        """
        for candidate in _name_candidates(function):
            if candidate in self.functions:
                return False
            if any(f.name == candidate.name for f in self.functions):
                continue
            if candidate.name != function.name:
                logger.debug(
                    "Renaming %s %s to %s in module %s",
                    function.method.upper(), function.path, candidate.name, self.name,
                )
            self.functions[candidate] = None
            return True


@dataclass
class Model:
    """A named declaration for Models.d.ts.

    Object schemas fill `properties`, enum schemas fill `enum`, and any other
    schema becomes a type alias of `alias`.
    """

    name: str
    properties: dict[str, str] = field(default_factory=dict)
    description: str = ""
    enum: tuple[Any, ...] = ()
    alias: str = ""


def _name_candidates(function: FunctionSpec) -> Iterator[FunctionSpec]:
    """today, todayPost, todayPost2, todayPost3, ..."""
    yield function
    base = function.name + function.method.capitalize()
    yield replace(function, name=base)
    counter = 2
    while True:
        yield replace(function, name=f"{base}{counter}")
        counter += 1


def function_name(segment: str) -> str:
    """Camel-case a path segment into a function name that is safe to export."""
    name = to_camel_case(segment)
    if not name:
        return ""
    return js_identifier(name, _MODULE_BINDINGS)


def _bind_params(params: list[dict[str, Any]], has_body: bool) -> list[str]:
    """Pick a JavaScript identifier for each parameter, in order.

    Names clashing with module bindings, function locals, the synthetic
    body parameter or an earlier parameter get a trailing underscore.
    """
    taken = set(_MODULE_BINDINGS | _FUNCTION_LOCALS)
    if has_body:
        taken.add("body")
    identifiers = []
    for param in params:
        identifier = js_identifier(param["name"], taken)
        taken.add(identifier)
        identifiers.append(identifier)
    return identifiers


def _url_path(path: str, path_params: list[tuple[str, str]]) -> str:
    """Turn '{name}' placeholders into template-literal interpolations."""
    if not path.startswith("/"):
        path = "/" + path
    for name, identifier in path_params:
        path = path.replace(f"{{{name}}}", f"${{encodeURIComponent({identifier})}}")
    return path


def build_function(
    spec: dict[str, Any],
    name: str,
    method: str,
    path: str,
    path_item: dict[str, Any],
) -> FunctionSpec:
    """Build the FunctionSpec for one operation."""
    operation = path_item[method]
    params = [p for p in parse_parameters(spec, path_item, operation) if p["location"] in ("path", "query")]
    body = request_body(spec, operation)
    identifiers = _bind_params(params, body is not None)

    doc_lines: list[str] = []
    summary = operation.get("description") or operation.get("summary")
    if summary:
        doc_lines.append(summary)
    doc_lines.extend(param_doc({**p, "name": ident}) for p, ident in zip(params, identifiers))
    if body is not None:
        doc_lines.append(body_doc(body))
    doc_lines.append(returns_doc(operation))

    names = list(identifiers)
    if body is not None:
        names.append("body")

    bound = list(zip(params, identifiers))
    return FunctionSpec(
        name=name,
        params=tuple(names),
        response_type=response_type(operation),
        method=method,
        path=path,
        doc_lines=tuple(line for entry in doc_lines for line in entry.splitlines()),
        query_params=tuple((p["name"], ident) for p, ident in bound if p["location"] == "query"),
        url_path=_url_path(path, [(p["name"], ident) for p, ident in bound if p["location"] == "path"]),
        has_body=body is not None,
        has_no_content=has_no_content(operation),
        body_kind=body_kind(operation),
    )


def build_modules(spec: dict[str, Any]) -> dict[str, Module]:
    """Group all two-segment paths into modules keyed by their first segment."""
    modules: dict[str, Module] = {}

    for path, path_item in get_paths(spec).items():
        parts = split_path(path)
        if parts is None:
            logger.debug("Skipping %s: not a /<module>/<function> path", path)
            continue

        module_name, segment = parts
        name = function_name(segment)
        if not name:
            logger.debug("Skipping %s: no usable function name", path)
            continue

        for method in path_item:
            if method not in HTTP_METHODS:
                continue
            module = modules.setdefault(module_name, Module(module_name))
            module.add(build_function(spec, name, method, path, path_item))

    return modules


def _nullable_type(schema: dict[str, Any]) -> str:
    return map_type(schema) + (" | null" if is_nullable(schema) else "")


def build_model(name: str, schema: dict[str, Any]) -> Model:
    """Build a Model: an interface, an enum union or a type alias."""
    description = schema.get("description", "")

    if "enum" in schema:
        return Model(name, description=description, enum=tuple(schema["enum"]))

    if schema.get("type") == "object" or "properties" in schema:
        properties = {
            prop_name: _nullable_type(prop_schema)
            for prop_name, prop_schema in schema.get("properties", {}).items()
        }
        return Model(name, properties=properties, description=description)

    return Model(name, description=description, alias=_nullable_type(schema))


def build_models(spec: dict[str, Any]) -> list[Model]:
    """Build models for all component schemas, in declared order."""
    return [build_model(name, schema) for name, schema in get_schemas(spec).items()]
