"""Shared fixtures for sdkgen tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from sdkgen.loader import load_spec

FIXTURES = Path(__file__).parent / "fixtures"
WEATHER_SPEC_PATH = FIXTURES / "weatherforecast.json"


@pytest.fixture(scope="session")
def weather_spec() -> dict[str, Any]:
    """The OpenAPI document of the ASP.NET weather forecast demo controller."""
    return load_spec(WEATHER_SPEC_PATH)


@pytest.fixture
def today_spec() -> dict[str, Any]:
    """Minimal document: one GET operation returning a WeatherForecast."""
    return {
        "openapi": "3.0.1",
        "paths": {
            "weatherforecast/today": {
                "get": {
                    "responses": {
                        "200": {
                            "description": "Success",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/WeatherForecast"},
                                }
                            },
                        }
                    }
                }
            }
        },
        "components": {
            "schemas": {
                "WeatherForecast": {
                    "type": "object",
                    "properties": {
                        "date": {"type": "string"},
                        "temperatureC": {"type": "integer"},
                        "summary": {"type": "string"},
                    },
                }
            }
        },
    }
