"""
Core pytest configuration for the entire test suite.

This module keeps only what every test needs: quiet third-party loggers, the
application logging config installed once per session, and the registration
of shared fixtures.

Domain fixtures live in:
- tests/test_fixtures/cart_fixtures.py   (products, collaborators, carts)
"""

from __future__ import annotations

import logging

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Keep this block above the project imports so Faker's provider loading does
# not spam the log during collection.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "asyncio",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest

from shopcart.config.settings import Settings
from shopcart.core.logging import setup_logging, stop_queue_logging


def make_test_settings(**overrides) -> Settings:
    """Settings for tests: never read a developer's .env, always ENV=testing."""
    values = {"ENV": "testing", "LOG_FORMAT": "text", "LOG_LEVEL": "INFO"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return make_test_settings()


# `autouse=True`: every test runs with the application logging config in place.
@pytest.fixture(scope="session", autouse=True)
def configure_logging(test_settings: Settings):
    """
    Install application logging for the whole session.

    pytest's caplog attaches its own handler to the root logger for each test,
    so records stay assertable through `caplog.records` on top of this config.
    """
    setup_logging(test_settings)
    yield
    stop_queue_logging()


# Cart test fixtures
from .test_fixtures.cart_fixtures import (  # noqa: E402,F401
    fake,
    catalog,
    sample_product,
    make_product,
    discount_calculator,
    tax_calculator,
    notifier,
    cart,
    mock_discount_calculator,
    mock_tax_calculator,
    mock_notifier,
    mock_cart,
)
