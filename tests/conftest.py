"""Pytest configuration and fixtures."""

import pytest

from confguard import (
    ConfigValidator,
    array,
    boolean,
    create_schema,
    number,
    object,
    string,
)


@pytest.fixture
def validator() -> ConfigValidator:
    """Provide a validator with the built-in evaluators."""
    return ConfigValidator()


@pytest.fixture
def widget_schema():
    """Provide a small schema covering every primitive kind."""
    return create_schema(
        {
            "title": string(required=True, min_length=1, max_length=20),
            "delay": number(min=16, max=1000, default=250),
            "enabled": boolean(default=True),
            "tags": array(max_length=3),
            "theme": object(required_keys=["color"]),
        },
        name="widget",
    )


@pytest.fixture
def valid_widget_config() -> dict:
    """Provide a configuration that satisfies widget_schema."""
    return {
        "title": "Products",
        "delay": 300,
        "enabled": False,
        "tags": ["a", "b"],
        "theme": {"color": "green"},
    }


@pytest.fixture
def defaults_only_schema():
    """Provide a schema where every property is optional with a default."""
    return create_schema(
        {
            "animationDuration": number(min=0, max=2000, default=300),
            "easing": string(default="ease-in-out"),
            "lazy": boolean(default=True),
            "filters": array(default=["category", "price"]),
        }
    )
