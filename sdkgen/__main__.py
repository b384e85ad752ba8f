"""Entry point: sdkgen SPEC OUTPUT_DIR (or python -m sdkgen).

Reads an OpenAPI document, writes <module>.server.js files and Models.d.ts.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .codegen import GeneratorConfig, generate
from .context_builder import build_models, build_modules
from .errors import SdkGenError
from .loader import load_spec

_DEFAULTS = GeneratorConfig()


@click.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--port-env", default=_DEFAULTS.port_env, envvar="SDKGEN_PORT_ENV", show_default=True, help="Environment variable holding the API port in generated code.")
@click.option("--error-helper", default=_DEFAULTS.error_helper, envvar="SDKGEN_ERROR_HELPER", show_default=True, help="Import path of the extractErrorMessage helper.")
@click.option("-v", "--verbose", is_flag=True, help="Log skipped paths and schemas.")
def main(spec_path: Path, output_dir: Path, port_env: str, error_helper: str, verbose: bool):
    """Generate JavaScript API clients and TypeScript models from an OpenAPI document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = GeneratorConfig(port_env=port_env, error_helper=error_helper)

    try:
        spec = load_spec(spec_path)
        modules = build_modules(spec)
        models = build_models(spec)
        written = generate(modules, models, output_dir, config)
    except SdkGenError as e:
        raise click.ClickException(e.message) from e

    for path in written:
        click.echo(f"  Created {path}")

    function_count = sum(len(module) for module in modules.values())
    click.echo(
        f"Generated {len(modules)} modules ({function_count} functions)"
        f" and {len(models)} models in {output_dir}"
    )


if __name__ == "__main__":
    main()
