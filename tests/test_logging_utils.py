import io
import json
import logging
from unittest.mock import patch

import structlog

from graphrx import Graph, GraphRx
from graphrx.logging_utils import build_handler, configure_logging


def _renderer(handler: logging.Handler):
    return handler.formatter.processors[-1]


def test_configure_logging_json_and_console():
    with patch("structlog.configure") as conf, patch("logging.basicConfig") as basic:
        configure_logging(level="WARNING", json_logs=False)
        procs = conf.call_args.kwargs["processors"]
        assert procs[-1] is structlog.stdlib.ProcessorFormatter.wrap_for_formatter
        assert basic.call_args.kwargs["level"] == logging.WARNING
        assert basic.call_args.kwargs["force"] is True
        (handler,) = basic.call_args.kwargs["handlers"]
        assert isinstance(_renderer(handler), structlog.dev.ConsoleRenderer)

    with patch("structlog.configure"), patch("logging.basicConfig") as basic:
        configure_logging(level="INFO", json_logs=True)
        (handler,) = basic.call_args.kwargs["handlers"]
        assert isinstance(_renderer(handler), structlog.processors.JSONRenderer)


def test_configure_logging_defaults_come_from_settings():
    with patch("structlog.configure"), patch("logging.basicConfig") as basic, patch(
        "graphrx.logging_utils.settings"
    ) as settings:
        settings.GRAPHRX_LOG_LEVEL = "ERROR"
        settings.GRAPHRX_LOG_JSON = True
        configure_logging()
        assert basic.call_args.kwargs["level"] == logging.ERROR
        (handler,) = basic.call_args.kwargs["handlers"]
        assert isinstance(_renderer(handler), structlog.processors.JSONRenderer)


def test_wrapper_log_lines_render_as_json():
    handler = build_handler(json_logs=True)
    buffer = io.StringIO()
    handler.setStream(buffer)
    package_logger = logging.getLogger("graphrx")
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO)
    try:
        GraphRx(Graph()).shutdown()
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)

    lines = [json.loads(line) for line in buffer.getvalue().splitlines()]
    shutdown = [line for line in lines if line["event"].startswith("GraphRx shut down")]
    assert len(shutdown) == 1
    assert shutdown[0]["level"] == "info"
    assert shutdown[0]["logger"] == "graphrx.graph_rx"
    assert "timestamp" in shutdown[0]
