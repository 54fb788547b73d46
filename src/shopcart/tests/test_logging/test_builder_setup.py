# src/shopcart/tests/test_logging/test_builder_setup.py
import json
import logging
from types import SimpleNamespace

from shopcart.core.logging.builder import QUIET_LOGGERS, make_dict_config, setup_logging
from shopcart.models import Product
from shopcart.services import LoggingOrderNotifier, RateTableTaxCalculator, ShoppingCart, TieredDiscountCalculator

from ..conftest import make_test_settings


# Create a minimal Settings-like object for testing
def dummy_settings(**overrides):
    s = SimpleNamespace(
        ENV="development",
        LOG_FORMAT="json",
        LOG_LEVEL="INFO",
        LOG_TO_STDOUT=False,
        LOG_DIR=None,  # set by the test
        LOG_MAX_BYTES=1000,
        LOG_BACKUP_COUNT=1,
        LOG_USE_QUEUE=False,
    )
    for key, value in overrides.items():
        setattr(s, key, value)
    return s


def test_make_dict_config_with_file_logging(tmp_path):
    cfg = make_dict_config(dummy_settings(LOG_DIR=tmp_path))
    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"].endswith("app.log")
    assert cfg["handlers"]["error_file"]["level"] == "ERROR"
    assert "json" in cfg["formatters"]
    assert set(cfg["filters"]) == {"correlation_id", "redact"}


def test_make_dict_config_stdout_only():
    cfg = make_dict_config(dummy_settings(LOG_TO_STDOUT=True))
    assert set(cfg["handlers"]) == {"console", "error_console"}
    assert cfg["loggers"][""]["handlers"] == ["console", "error_console"]
    for name in QUIET_LOGGERS:
        assert cfg["loggers"][name]["level"] == "WARNING"


def test_setup_logging_creates_log_dir(tmp_path):
    settings = dummy_settings(LOG_DIR=tmp_path / "logs")
    # ensure DIR does not exist
    assert not settings.LOG_DIR.exists()
    setup_logging(settings)
    # setup should create log dir
    assert settings.LOG_DIR.exists()
    root = logging.getLogger()
    assert root.handlers
    assert root.level == logging.INFO


def test_setup_logging_accepts_settings_model(tmp_path):
    setup_logging(make_test_settings(LOG_LEVEL="debug"))
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("shopcart").level == logging.DEBUG


async def test_confirmation_log_line_carries_order_id(capsys):
    """
    Behavior:
        - Configure JSON console logging inside the test so the handler writes
          to the captured stderr.
        - Check out with the logging notifier and drain the confirmation.

    Importance:
        - The confirmation runs on a detached task; the only way to tie its log
          line back to the order is the correlation id it inherits.
    """
    setup_logging(make_test_settings(LOG_FORMAT="json", LOG_LEVEL="INFO"))
    settings = make_test_settings()
    cart = ShoppingCart(
        TieredDiscountCalculator(settings),
        RateTableTaxCalculator(settings),
        LoggingOrderNotifier(),
    )
    cart.add_item(Product(id="mouse-1", name="Wireless Mouse", price=50), 1)

    result = await cart.checkout("customer-123", "US")
    await cart.drain_notifications()

    lines = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
    confirmations = [entry for entry in lines if entry["message"].startswith("Order confirmation")]
    completed = [entry for entry in lines if entry["message"].startswith("Checkout completed")]

    assert [entry["correlation_id"] for entry in confirmations] == [result.order_id]
    assert confirmations[0]["customer_id"] == "customer-123"
    # logged by checkout itself, outside the confirmation's context
    assert completed[0]["order_id"] == result.order_id
    assert completed[0]["correlation_id"] == "-"
