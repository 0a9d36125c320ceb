"""Background-thread logging for the stdio server

Records go through a QueueHandler and are written by a QueueListener thread,
to stderr only: stdout carries the MCP protocol stream. Entry points call
setup_async_logging() once with the level from Settings, and again if the
level changes after settings load.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from queue import Queue

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"

# Held at INFO when LOG_LEVEL=debug
NOISY_LOGGERS = ("httpx", "httpcore", "mcp.server.lowlevel.server", "mcp.server.stdio")


class AsyncLoggingManager:
    """Owns the queue, its root-logger handler, and the listener thread"""

    def __init__(self) -> None:
        self.log_queue: Queue[logging.LogRecord] = Queue(-1)
        self.queue_handler: logging.handlers.QueueHandler | None = None
        self.listener: logging.handlers.QueueListener | None = None

    def setup(self, level: int = logging.INFO, log_file: Path | None = None) -> None:
        """Route the root logger through the queue at `level`

        Replaces any earlier setup from this manager.
        """
        if self.listener is not None:
            self.shutdown()

        formatter = logging.Formatter(LOG_FORMAT)
        sinks: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            sinks.append(logging.FileHandler(log_file))
        for sink in sinks:
            sink.setFormatter(formatter)

        self.listener = logging.handlers.QueueListener(
            self.log_queue, *sinks, respect_handler_level=True
        )
        self.listener.start()
        self.queue_handler = logging.handlers.QueueHandler(self.log_queue)

        root = logging.getLogger()
        root.setLevel(level)
        root.handlers.clear()
        root.addHandler(self.queue_handler)

        if level < logging.INFO:
            for name in NOISY_LOGGERS:
                logging.getLogger(name).setLevel(logging.INFO)

    def shutdown(self) -> None:
        """Flush pending records, stop the listener, detach from root"""
        if self.listener is not None:
            self.listener.stop()
            self.listener = None
        if self.queue_handler is not None:
            logging.getLogger().removeHandler(self.queue_handler)
            self.queue_handler = None


_manager = AsyncLoggingManager()


def setup_async_logging(level: int = logging.INFO, log_file: Path | None = None) -> None:
    _manager.setup(level, log_file)


def shutdown_async_logging() -> None:
    _manager.shutdown()


def get_logger(name: str) -> logging.Logger:
    """Module logger (usually get_logger(__name__))"""
    return logging.getLogger(name)
