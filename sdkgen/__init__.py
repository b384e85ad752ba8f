"""Generate JavaScript client modules and TypeScript models from OpenAPI documents."""

__version__ = "0.1.0"
