import logging
import structlog

from .config import settings

# Applied to structlog events and to records from stdlib loggers alike, so
# ``logging.getLogger(__name__)`` output in graphrx renders the same way.
SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def build_handler(json_logs: bool) -> logging.Handler:
    """Return a stream handler that renders records through structlog."""
    renderer: structlog.types.Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    *, level: int | str | None = None, json_logs: bool | None = None
) -> None:
    """Configure structlog-based logging for structlog and stdlib loggers.

    Parameters
    ----------
    level:
        Logging level, e.g. ``logging.INFO`` or ``"DEBUG"``. Defaults to the
        ``GRAPHRX_LOG_LEVEL`` environment variable or ``INFO``.
    json_logs:
        If ``True``, render every log line as JSON. Defaults to the
        ``GRAPHRX_LOG_JSON`` environment variable (``"1"``, ``"true"``).
    """
    if level is None:
        level = settings.GRAPHRX_LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_logs is None:
        json_logs = settings.GRAPHRX_LOG_JSON

    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Replaces handlers left by an earlier call.
    logging.basicConfig(level=level, handlers=[build_handler(json_logs)], force=True)
