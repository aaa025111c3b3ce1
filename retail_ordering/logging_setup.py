import logging
import logging.handlers
from pathlib import Path
import traceback

from retail_ordering.config import config

class Logger:
    """Logging manager for the Retail Ordering System."""

    _instance = None
    _loggers = {}

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the logger if not already initialized."""
        if self._initialized:
            return

        self._log_config = config.log_config
        self._log_dir = Path(self._log_config['directory'])

        # Create log directory if it doesn't exist
        if not self._log_dir.exists():
            self._log_dir.mkdir(parents=True)

        # Set up global logging configuration
        self._configure_root_logger()

        # Application logger
        self._app_logger = self.get_logger('app')

        self._initialized = True

    def _level(self):
        return getattr(logging, self._log_config['level'].upper(), logging.INFO)

    def _attach_handlers(self, target, file_name):
        """Give a logger a rotating file handler plus the optional console one."""
        for handler in target.handlers[:]:
            target.removeHandler(handler)

        formatter = logging.Formatter(self._log_config['format'])
        handlers = [logging.handlers.RotatingFileHandler(
            self._log_dir / file_name,
            maxBytes=self._log_config['max_size_mb'] * 1024 * 1024,
            backupCount=self._log_config['backup_count']
        )]
        if self._log_config['console_output']:
            handlers.append(logging.StreamHandler())

        for handler in handlers:
            handler.setFormatter(formatter)
            target.addHandler(handler)

    def _configure_root_logger(self):
        """Send module loggers (logging.getLogger(__name__)) to retail_ordering.log."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self._level())
        self._attach_handlers(root_logger, 'retail_ordering.log')

    def get_logger(self, name):
        """Get a named logger writing to its own <name>.log.

        Args:
            name: Name of the logger

        Returns:
            Configured logger instance
        """
        if name in self._loggers:
            return self._loggers[name]

        logger = logging.getLogger(name)
        logger.setLevel(self._level())
        self._attach_handlers(logger, f"{name}.log")

        # The root handlers would write every record a second time
        logger.propagate = False

        self._loggers[name] = logger
        return logger

    def log_exception(self, logger_name, exception, message=None):
        """Log an exception with stack trace.

        Args:
            logger_name: Logger name
            exception: Exception object
            message: Optional message to include
        """
        logger = self.get_logger(logger_name)

        if message:
            logger.error(f"{message}: {str(exception)}")
        else:
            logger.error(str(exception))

        logger.error(traceback.format_exc())

    @property
    def app_logger(self):
        """Get the application logger."""
        return self._app_logger

# Global logger instance
logger = Logger()

def get_logger(name):
    """Get a logger with the specified name."""
    return logger.get_logger(name)

def log_exception(logger_name, exception, message=None):
    """Log an exception with stack trace."""
    logger.log_exception(logger_name, exception, message)
