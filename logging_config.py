import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging(level: str | int = logging.INFO):
    """
    Configures structured JSON logging for the transcription service.

    A single stdout handler with a JSON formatter (timestamp, level, logger
    name, message, trace_id, span_id) replaces the handlers of the root
    logger and of the Uvicorn loggers, so request logs and application logs
    share one format.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)
        u_logger.handlers = []
        u_logger.addHandler(stream_handler)
        u_logger.propagate = False

    return root_logger
