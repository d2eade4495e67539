import json
import logging

import structlog

from rivals.utils.logging import configure_logging, get_logger


def test_json_logging_renders_key_values(capsys):
    configure_logging(level=logging.DEBUG, json=True)
    try:
        get_logger("rivals.test").info("dice_rolled", production=3, event_die=1)
        line = capsys.readouterr().out.strip().splitlines()[-1]
    finally:
        structlog.reset_defaults()

    record = json.loads(line)
    assert record["event"] == "dice_rolled"
    assert record["production"] == 3
    assert record["event_die"] == 1
    assert record["level"] == "info"
    assert "timestamp" in record


def test_level_filter_drops_debug(capsys):
    configure_logging(level=logging.WARNING, json=True)
    try:
        get_logger().debug("quiet")
        get_logger().info("quiet")
        out = capsys.readouterr().out
    finally:
        structlog.reset_defaults()

    assert "quiet" not in out
