"""Application-wide logging configuration.

Logs to the console at the configured level and, when a log directory is set,
writes ERROR and higher to a rotating file.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional


class ConfigureLogger:
    """Configures the root logger once at startup."""

    def __init__(
        self,
        log_name: str = "kerpic",
        log_dir: Optional[str] = None,
        console_level: int = logging.INFO,
        file_level: int = logging.ERROR,
        max_bytes: int = 1_000_000,
        backup_count: int = 3,
    ):
        self.logger = logging.getLogger()
        self.logger.setLevel(min(console_level, file_level))

        self._setup_console_handler(console_level)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            log_file_path = os.path.join(log_dir, f"{log_name}.log")
            self._setup_file_handler(log_file_path, file_level, max_bytes, backup_count)

    def _setup_console_handler(self, level: int):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        self.logger.addHandler(console_handler)

    def _setup_file_handler(self, path: str, level: int, max_bytes: int, backup_count: int):
        file_handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        self.logger.addHandler(file_handler)
