"""Render templates and write generated output.

Takes the modules and models from context_builder and produces one
<module>.server.js per module plus Models.d.ts.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import jinja2

from .context_builder import FunctionSpec, Model, Module
from .errors import OutputWriteError

TEMPLATE_DIR = Path(__file__).parent / "templates"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings baked into the generated files."""

    port_env: str = "DOTNET_PORT"
    error_helper: str = "~/utils/extract-error-message"
    module_suffix: str = ".server.js"
    models_file: str = "Models.d.ts"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def ts_key(name: str) -> str:
    """Quote object keys that are not plain identifiers."""
    return name if _IDENTIFIER.match(name) else _quote(name)


def ts_literal(value: Any) -> str:
    """Render an enum value as a TypeScript literal type."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if value is None:
        return "null"
    return _quote(str(value))


def jsdoc_text(text: str) -> str:
    """Keep free text from closing the surrounding doc comment."""
    return text.replace("*/", "*\\/")


def normalize_newlines(text: str) -> str:
    """Collapse CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["ts_key"] = ts_key
    env.filters["ts_literal"] = ts_literal
    env.filters["jsdoc_text"] = jsdoc_text
    return env


_ENV = _environment()


def render_header(config: GeneratorConfig | None = None) -> str:
    """Render the import/constant preamble shared by every module file."""
    return _ENV.get_template("header.js.j2").render(config=config or GeneratorConfig())


def render_function(fn: FunctionSpec) -> str:
    """Render one async wrapper function with its JSDoc block."""
    return _ENV.get_template("function.js.j2").render(fn=fn)


def render_module(module: Module, config: GeneratorConfig | None = None) -> str:
    """Render a full module file: header followed by every function."""
    parts = [render_header(config)]
    parts.extend(render_function(fn) for fn in module)
    return "".join(parts)


def render_model(model: Model) -> str:
    """Render one interface, enum union or type alias declaration."""
    return _ENV.get_template("model.d.ts.j2").render(model=model)


def render_models(models: Iterable[Model]) -> str:
    """Render all model declarations separated by blank lines."""
    return "\n".join(render_model(model) for model in models)


def write_file(path: Path, content: str) -> None:
    """Write content with LF line endings regardless of platform."""
    try:
        path.write_text(normalize_newlines(content), encoding="utf-8", newline="\n")
    except OSError as e:
        raise OutputWriteError(path, e) from e
    logger.info("Wrote %s", path)


def generate(
    modules: dict[str, Module],
    models: list[Model],
    output_dir: str | Path,
    config: GeneratorConfig | None = None,
) -> list[Path]:
    """Write every module file and the models file into output_dir.

    Empty inputs write nothing for that artifact. Returns the written paths.
    """
    config = config or GeneratorConfig()
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(output_dir, e) from e

    written: list[Path] = []
    for name, module in modules.items():
        path = output_dir / f"{name}{config.module_suffix}"
        write_file(path, render_module(module, config))
        written.append(path)

    if models:
        path = output_dir / config.models_file
        write_file(path, render_models(models))
        written.append(path)

    return written
