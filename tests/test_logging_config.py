import json
import logging

from trend_dashboard.config import Settings
from trend_dashboard.logging_config import HANDLER_NAME, DashboardJsonFormatter, setup_logging


def test_json_formatter_adds_level_and_logger():
    record = logging.LogRecord("dashboard.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)

    line = json.loads(DashboardJsonFormatter().format(record))

    assert line["message"] == "hello x"
    assert line["level"] == "INFO"
    assert line["logger"] == "dashboard.test"
    assert line["timestamp"] == record.created


def test_setup_logging_installs_one_named_handler():
    settings = Settings(LOG_LEVEL="WARNING", LOG_JSON=True)

    setup_logging(settings)
    setup_logging(settings)

    root = logging.getLogger()
    assert [h.get_name() for h in root.handlers].count(HANDLER_NAME) == 1
    assert root.level == logging.WARNING
