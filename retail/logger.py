"""
Process-wide JSON logging for the Retail Manager.

One ``retail_manager`` logger owns the handlers; ``get_logger("retail_manager.x")``
hands out children that propagate to it, so every record carries the name of
the module that wrote it.
"""

import json
import logging
import os
import threading
from pathlib import Path

ROOT_LOGGER_NAME = "retail_manager"

DEFAULT_FIELDS = {
    "time": "asctime",
    "level": "levelname",
    "logger": "name",
    "module": "module",
    "function": "funcName",
    "line": "lineno",
    "message": "message",
}


class SingletonLogger:
    """
    Configures the root application logger exactly once per process.

    Files live in ``LOG_DIR`` (default ``logs``):
    ``retail_manager.log`` gets INFO and above, ``errors.log`` ERROR and above.
    Both are truncated at startup. The console handler level comes from
    ``LOG_LEVEL`` (default DEBUG).
    """
    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._root = None
                    cls._instance = instance
        return cls._instance

    @property
    def root(self) -> logging.Logger:
        if self._root is None:
            with self._lock:
                if self._root is None:
                    self._root = self._configure()
        return self._root

    def get_logger(self, name: str = ROOT_LOGGER_NAME) -> logging.Logger:
        root = self.root
        if not name or name == ROOT_LOGGER_NAME:
            return root
        if not name.startswith(ROOT_LOGGER_NAME + "."):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        return logging.getLogger(name)

    @staticmethod
    def _configure() -> logging.Logger:
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.handlers.clear()

        formatter = JsonFormatter(DEFAULT_FIELDS)

        logs_dir = Path(os.environ.get("LOG_DIR", "logs"))
        logs_dir.mkdir(parents=True, exist_ok=True)

        for filename, level in (("retail_manager.log", logging.INFO), ("errors.log", logging.ERROR)):
            handler = logging.FileHandler(logs_dir / filename, mode='w', encoding='utf-8')
            handler.setLevel(level)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(os.environ.get("LOG_LEVEL", "DEBUG").upper())
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        return logger


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.

    ``fields`` maps output keys to LogRecord attributes. Tracebacks and stack
    info are added under ``exc_info`` / ``stack_info`` when present.
    """

    def __init__(self, fields: dict = None, time_format: str = "%Y-%m-%dT%H:%M:%S"):
        super().__init__(datefmt=time_format)
        self.fields = dict(fields or {"message": "message"})

    def usesTime(self) -> bool:
        return "asctime" in self.fields.values()

    def format(self, record) -> str:
        record.message = record.getMessage()
        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)

        payload = {key: getattr(record, attr, None) for key, attr in self.fields.items()}

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            payload["exc_info"] = record.exc_text
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(payload, default=str)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return the application logger, or a named child of it."""
    return SingletonLogger().get_logger(name)
