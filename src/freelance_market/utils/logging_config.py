"""
Centralized logging configuration for the Freelance Market backend.
Provides component-specific loggers with separate log files.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any

from ..config import get_config


DETAILED_FORMAT = (
    '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s'
)
SIMPLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class ComponentLogger:
    """Manages component-specific logging with separate files."""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized = False
    _log_dir: Optional[Path] = None
    _log_to_file = True
    _debug = False

    # Component definitions with their log levels
    COMPONENTS = {
        'api': {'level': logging.INFO, 'file': 'api.log'},
        'database': {'level': logging.INFO, 'file': 'database.log'},
        'ledger': {'level': logging.INFO, 'file': 'ledger.log'},
        'auth': {'level': logging.INFO, 'file': 'auth.log'},
        'main': {'level': logging.INFO, 'file': 'main.log'},
        'error': {'level': logging.ERROR, 'file': 'errors.log'},  # Centralized error log
    }

    @classmethod
    def initialize(cls, log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
        """
        Initialize the logging system with component-specific loggers.

        Args:
            log_dir: Directory for log files. Defaults to config.app.log_dir
            debug: Enable debug logging for all components. Defaults to config
        """
        if cls._initialized:
            return

        config = get_config()
        cls._debug = config.server.debug if debug is None else debug
        cls._log_to_file = config.app.log_to_file

        if cls._log_to_file:
            cls._log_dir = Path(log_dir or config.app.log_dir)
            cls._log_dir.mkdir(parents=True, exist_ok=True)

        root_level = logging.DEBUG if cls._debug else logging.getLevelName(config.app.log_level)
        if not isinstance(root_level, int):
            root_level = logging.INFO

        unified_handler = None
        if cls._log_to_file:
            unified_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / 'unified.log',
                maxBytes=20 * 1024 * 1024,  # 20MB
                backupCount=3,
                encoding='utf-8'
            )
            unified_handler.setLevel(root_level)
            unified_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

        for component_name, component_config in cls.COMPONENTS.items():
            level = logging.DEBUG if cls._debug else component_config['level']
            cls._loggers[component_name] = cls._build_logger(
                component_name, level, component_config['file'], unified_handler
            )

        cls._initialized = True

        main_logger = cls._loggers['main']
        main_logger.info("Freelance Market logging initialized")
        if cls._log_dir:
            main_logger.info(f"Log directory: {cls._log_dir}")

    @classmethod
    def _build_logger(
        cls,
        component: str,
        level: int,
        file_name: str,
        unified_handler: Optional[logging.Handler],
    ) -> logging.Logger:
        logger = logging.getLogger(f"freelance.{component}")

        # Clear existing handlers
        logger.handlers.clear()
        logger.propagate = False
        logger.setLevel(level)

        if cls._log_to_file:
            file_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / file_name,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
            logger.addHandler(file_handler)
            if unified_handler is not None:
                logger.addHandler(unified_handler)

        # Console handler for errors and critical
        if component in ('error', 'main') or not cls._log_to_file:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.ERROR if cls._log_to_file else level)
            console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt='%H:%M:%S'))
            logger.addHandler(console_handler)

        return logger

    @classmethod
    def get_logger(cls, component: str) -> logging.Logger:
        """
        Get a logger for a specific component.

        Args:
            component: Component name (api, database, ledger, auth, ...)
                      or a module path like 'freelance_market.store.ledger'

        Returns:
            Logger instance for the component
        """
        if not cls._initialized:
            cls.initialize()

        if component.startswith('freelance_market'):
            component = cls._component_for_module(component)

        if component not in cls._loggers:
            level = logging.DEBUG if cls._debug else logging.INFO
            cls._loggers[component] = cls._build_logger(
                component, level, f'{component}.log', cls._unified_handler()
            )

        return cls._loggers[component]

    @staticmethod
    def _component_for_module(module_name: str) -> str:
        parts = module_name.split('.')
        if len(parts) < 2:
            return 'main'
        if parts[1] == 'api':
            return 'api'
        if parts[1] in ('db', 'repositories'):
            return 'database'
        if parts[1] in ('store', 'domain'):
            return 'ledger'
        if parts[1] == 'auth':
            return 'auth'
        return 'main'

    @classmethod
    def _unified_handler(cls) -> Optional[logging.Handler]:
        for handler in cls._loggers.get('main', logging.getLogger()).handlers:
            if getattr(handler, 'baseFilename', '').endswith('unified.log'):
                return handler
        return None

    @classmethod
    def log_exception(cls, component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an exception with context to both component and error logs.

        Args:
            component: Component where the exception occurred
            exc: The exception to log
            context: Additional context information
        """
        component_logger = cls.get_logger(component)
        error_logger = cls.get_logger('error')

        context_str = ""
        if context:
            context_str = " | Context: " + ", ".join(f"{k}={v}" for k, v in context.items())

        component_logger.error(f"Exception in {component}: {type(exc).__name__}: {exc}{context_str}", exc_info=exc)
        error_logger.error(f"[{component}] {type(exc).__name__}: {exc}{context_str}", exc_info=exc)

    @classmethod
    def reset(cls) -> None:
        """Close handlers and forget loggers so the next call re-initializes."""
        for logger in cls._loggers.values():
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
        cls._loggers = {}
        cls._initialized = False
        cls._log_dir = None


# Convenience functions
def get_logger(component: str) -> logging.Logger:
    """Get a logger for a specific component."""
    return ComponentLogger.get_logger(component)


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for a module using its __name__.

    Example:
        logger = get_module_logger(__name__)
    """
    return ComponentLogger.get_logger(module_name)


def initialize_logging(log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
    """Initialize the logging system."""
    ComponentLogger.initialize(log_dir=log_dir, debug=debug)


def log_exception(component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log an exception with context."""
    ComponentLogger.log_exception(component, exc, context)


def get_log_directory() -> Optional[Path]:
    """Get the current log directory path."""
    return ComponentLogger._log_dir
