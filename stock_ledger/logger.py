import logging
import json
from pathlib import Path
import threading


ROOT_LOGGER_NAME = "stock_ledger"


class SingletonLogger:
    """
    Singleton that installs the application's log handlers exactly once per process.

    Modules obtain child loggers through get_logger(); every child propagates
    to the "stock_ledger" logger configured here.
    """
    _instance = None
    _lock = threading.Lock()
    _configured = False

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(SingletonLogger, cls).__new__(cls)
        return cls._instance

    def configure(self, level: str = "INFO", log_dir: str = "logs") -> logging.Logger:
        """
        Attach the JSON handlers to the root application logger.

        Args:
            level (str): Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir (str): Directory for the log files. Empty disables file output.

        Returns:
            logging.Logger: The configured application logger
        """
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        if self._configured:
            return logger

        with self._lock:
            if self._configured:
                return logger

            logger.setLevel(logging.DEBUG)
            logger.handlers.clear()

            formatter = JsonFormatter({
                "timestamp": "asctime",
                "level": "levelname",
                "logger": "name",
                "module": "module",
                "function": "funcName",
                "line": "lineno",
                "message": "message"
            })

            if log_dir:
                logs_path = Path(log_dir)
                logs_path.mkdir(parents=True, exist_ok=True)

                file_handler = logging.FileHandler(logs_path / "stock_ledger.log", encoding='utf-8')
                file_handler.setLevel(logging.INFO)
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)

                error_file_handler = logging.FileHandler(logs_path / "errors.log", encoding='utf-8')
                error_file_handler.setLevel(logging.ERROR)
                error_file_handler.setFormatter(formatter)
                logger.addHandler(error_file_handler)

            console_handler = logging.StreamHandler()
            console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

            self._configured = True

        return logger


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the LogRecord.

    @param dict fmt_dict: Key: logging format attribute pairs. Defaults to {"message": "message"}.
    @param str time_format: time.strftime() format string. Default: "%Y-%m-%dT%H:%M:%S"
    @param str msec_format: Microsecond formatting. Appended at the end. Default: "%s.%03dZ"
    """
    def __init__(self, fmt_dict: dict = None, time_format: str = "%Y-%m-%dT%H:%M:%S", msec_format: str = "%s.%03dZ"):
        super().__init__()
        self.fmt_dict = fmt_dict if fmt_dict is not None else {"message": "message"}
        self.default_time_format = time_format
        self.default_msec_format = msec_format
        self.datefmt = None

    def usesTime(self) -> bool:
        return "asctime" in self.fmt_dict.values()

    def formatMessage(self, record) -> dict:
        """
        Return a dictionary of the selected LogRecord attributes instead of a string.
        KeyError is raised if an unknown attribute is provided in the fmt_dict.
        """
        return {fmt_key: record.__dict__[fmt_val] for fmt_key, fmt_val in self.fmt_dict.items()}

    def format(self, record) -> str:
        record.message = record.getMessage()

        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)

        message_dict = self.formatMessage(record)

        if record.exc_info:
            # Traceback text is constant, cache it on the record
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)

        if record.exc_text:
            message_dict["exc_info"] = record.exc_text

        if record.stack_info:
            message_dict["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(message_dict, default=str)


def setup_logging(level: str = "INFO", log_dir: str = "logs") -> logging.Logger:
    """Configure the application handlers (no-op after the first call)."""
    return SingletonLogger().configure(level=level, log_dir=log_dir)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger under the application namespace.

    Args:
        name (str): Dotted logger name, e.g. "stock_ledger.buisness.ledger"

    Returns:
        logging.Logger: Logger that propagates to the configured handlers
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
