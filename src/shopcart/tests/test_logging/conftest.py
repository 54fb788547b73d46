# src/shopcart/tests/test_logging/conftest.py
import pytest

from shopcart.core.logging import (
    reset_correlation_id,
    set_correlation_id,
    setup_logging,
    stop_queue_logging,
)

from ..conftest import make_test_settings


# Tests in this package reconfigure the root logger and bind correlation ids.
# Put the session configuration and an unbound context back afterwards.
@pytest.fixture(autouse=True)
def restore_logging():
    token = set_correlation_id(None)
    yield
    reset_correlation_id(token)
    stop_queue_logging()
    setup_logging(make_test_settings())
