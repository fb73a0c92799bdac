"""
Logging configuration for the VideoHub service.

Console output is colored, the optional log file rotates, and the database,
storage and web server libraries are kept quiet unless debugging.
"""

import logging
import logging.handlers
import os
import sys
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional


CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Third-party loggers and the level they run at outside DEBUG
QUIET_LOGGERS = {
    'pymongo': logging.WARNING,
    'botocore': logging.WARNING,
    'boto3': logging.WARNING,
    's3transfer': logging.WARNING,
    'uvicorn': logging.WARNING,
    'uvicorn.access': logging.WARNING,
    'fastapi': logging.WARNING,
}


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # Color a copy so file handlers keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname)
        if color:
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class VideoHubLogger:
    """Root logger setup for the VideoHub service"""

    def __init__(self, log_level: str = "INFO", log_file: Optional[str] = None, enable_console: bool = True):
        self.log_level = log_level.upper()
        self.log_file = log_file
        self.enable_console = enable_console

        self._setup_logging()

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

    def _setup_logging(self) -> None:
        root_logger = logging.getLogger()
        root_logger.setLevel(self.level)
        root_logger.handlers.clear()

        if self.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.level)
            console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT))
            root_logger.addHandler(console_handler)

        if self.log_file:
            file_handler = self._create_file_handler(self.log_file)
            if file_handler is not None:
                root_logger.addHandler(file_handler)

        self._setup_component_loggers()

        logging.getLogger(__name__).info(f"Logging initialized - Level: {self.log_level}, File: {self.log_file}")

    @staticmethod
    def _create_file_handler(log_file: str) -> Optional[logging.Handler]:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            handler = logging.handlers.RotatingFileHandler(log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS)
            handler.setLevel(logging.DEBUG)  # File gets all messages
            handler.setFormatter(logging.Formatter(FILE_FORMAT))
            return handler
        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}")
            return None

    def _setup_component_loggers(self) -> None:
        debugging = self.log_level == 'DEBUG'

        logging.getLogger('videohub.api').setLevel(logging.DEBUG if debugging else logging.INFO)

        # Upload failures must always reach the log
        logging.getLogger('videohub.video.infrastructure.uploaders').setLevel(logging.INFO)

        for name, level in QUIET_LOGGERS.items():
            logging.getLogger(name).setLevel(logging.INFO if debugging and name.startswith('uvicorn') else level)

    @staticmethod
    def setup_exception_logging():
        """Route uncaught exceptions through logging"""

        def handle_exception(exc_type, exc_value, exc_traceback):
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return

            logging.getLogger("uncaught_exception").critical(
                "Uncaught exception",
                exc_info=(exc_type, exc_value, exc_traceback)
            )

        sys.excepthook = handle_exception


class PerformanceLogger:
    """Times operations; safe to share between concurrent requests"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(f"performance.{name}")

    @contextmanager
    def measure(self, operation: str, **context) -> Iterator[Dict[str, float]]:
        """
        Log how long the wrapped block took.

        Yields a dict whose ``seconds`` entry is filled in when the block exits.
        Failures are logged at WARNING with the elapsed time and re-raised.
        """
        timing: Dict[str, float] = {}
        details = "".join(f" {key}={value}" for key, value in context.items())
        started = time.perf_counter()
        self.logger.debug(f"Started: {operation}{details}")
        try:
            yield timing
        except BaseException:
            timing["seconds"] = time.perf_counter() - started
            self.logger.warning(f"Failed: {operation}{details} after {timing['seconds']:.3f}s")
            raise
        timing["seconds"] = time.perf_counter() - started
        self.logger.info(f"Completed: {operation}{details} in {timing['seconds']:.3f}s")


class ErrorTracker:
    """Logs errors with their component and context"""

    def __init__(self, component_name: str):
        self.component_name = component_name
        self.logger = logging.getLogger(f"errors.{component_name}")

    def log_error(self, error: BaseException, context: str = "", additional_data: Optional[dict] = None) -> None:
        error_msg = f"Error in {self.component_name}"
        if context:
            error_msg += f" ({context})"
        error_msg += f": {error}"

        if additional_data:
            error_msg += f" | Data: {additional_data}"

        self.logger.error(error_msg, exc_info=error)


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> VideoHubLogger:
    """Setup logging for the entire application"""
    logger_setup = VideoHubLogger(log_level=log_level, log_file=log_file)
    VideoHubLogger.setup_exception_logging()
    return logger_setup


def get_performance_logger(component_name: str) -> PerformanceLogger:
    return PerformanceLogger(component_name)


def get_error_tracker(component_name: str) -> ErrorTracker:
    return ErrorTracker(component_name)
