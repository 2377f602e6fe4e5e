"""
Configuration management for the Freelance Market backend.

Defaults live in code, an optional JSON file can override them and
environment variables override both.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, asdict
import logging


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class DatabaseConfig:
    """Database configuration."""

    url: str = "sqlite:///freelance_market.db"
    echo: bool = False
    pool_pre_ping: bool = True
    log_queries: bool = False  # Slow-query logging on the engine


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 3001
    debug: bool = False
    auto_reload: bool = False
    workers: int = 1


@dataclass
class AppConfig:
    """Main application configuration."""

    app_name: str = "Freelance Market"
    version: str = "1.0.0"
    description: str = "Contracts, jobs and profile balances for a freelance marketplace"

    enable_cors: bool = True
    cors_origins: Optional[List[str]] = None

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"

    is_development: bool = False


@dataclass
class MarketConfig:
    """Business settings exposed to the HTTP layer."""

    profile_header: str = "profile_id"
    best_clients_default_limit: int = 2


@dataclass
class FreelanceConfig:
    """Complete configuration for the Freelance Market backend."""

    app: AppConfig
    server: ServerConfig
    database: DatabaseConfig
    market: MarketConfig

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "app": asdict(self.app),
            "server": asdict(self.server),
            "database": asdict(self.database),
            "market": asdict(self.market),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FreelanceConfig":
        """Create from dictionary."""
        return cls(
            app=AppConfig(**data.get("app", {})),
            server=ServerConfig(**data.get("server", {})),
            database=DatabaseConfig(**data.get("database", {})),
            market=MarketConfig(**data.get("market", {})),
        )


class ConfigManager:
    """Manages configuration loading, saving, and environment overrides."""

    def __init__(self):
        self.config_file: Optional[Path] = None
        self.config: Optional[FreelanceConfig] = None

    def get_config_file_path(self) -> Path:
        """Get the path for the config file."""
        explicit = os.getenv("FREELANCE_CONFIG_FILE")
        if explicit:
            return Path(explicit)
        return Path.cwd() / "data" / "config.json"

    def apply_environment(self, config: FreelanceConfig) -> FreelanceConfig:
        """Apply FREELANCE_* environment overrides in place."""
        db_url = os.getenv("FREELANCE_DATABASE_URL") or os.getenv("DATABASE_URL")
        if db_url:
            config.database.url = db_url

        config.server.debug = _env_flag("FREELANCE_DEBUG", config.server.debug)
        if config.server.debug:
            config.app.log_level = "DEBUG"
        config.app.log_level = os.getenv("FREELANCE_LOG_LEVEL", config.app.log_level).upper()
        config.app.log_dir = os.getenv("FREELANCE_LOG_DIR", config.app.log_dir)
        config.app.log_to_file = _env_flag("FREELANCE_LOG_TO_FILE", config.app.log_to_file)
        config.database.log_queries = _env_flag(
            "FREELANCE_LOG_QUERIES", config.database.log_queries
        )

        config.server.host = os.getenv("FREELANCE_HOST", config.server.host)
        port = os.getenv("FREELANCE_PORT")
        if port:
            try:
                config.server.port = int(port)
            except ValueError:
                logging.warning(f"Ignoring invalid FREELANCE_PORT value: {port!r}")

        return config

    def create_default_config(self) -> FreelanceConfig:
        """Create default configuration."""
        return FreelanceConfig(
            app=AppConfig(),
            server=ServerConfig(),
            database=DatabaseConfig(),
            market=MarketConfig(),
        )

    def load_config(self, reload: bool = False) -> FreelanceConfig:
        """Load configuration from file or create default."""
        if self.config is not None and not reload:
            return self.config

        self.config_file = self.get_config_file_path()

        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                config = FreelanceConfig.from_dict(data)
                logging.info(f"Loaded configuration from {self.config_file}")
            except (OSError, ValueError, TypeError) as e:
                logging.warning(f"Failed to load config from {self.config_file}: {e}")
                logging.info("Creating default configuration")
                config = self.create_default_config()
        else:
            config = self.create_default_config()

        self.config = self.apply_environment(config)
        return self.config

    def save_config(self, config: Optional[FreelanceConfig] = None) -> bool:
        """Save configuration to file."""
        if config is None:
            config = self.config

        if config is None:
            logging.error("No configuration to save")
            return False

        try:
            if self.config_file is None:
                self.config_file = self.get_config_file_path()

            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)

            logging.info(f"Saved configuration to {self.config_file}")
            return True

        except OSError as e:
            logging.error(f"Failed to save config to {self.config_file}: {e}")
            return False

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of warnings/errors."""
        config = self.load_config()
        issues = []

        if not 0 < config.server.port < 65536:
            issues.append(f"Server port out of range: {config.server.port}")

        if config.market.best_clients_default_limit <= 0:
            issues.append("market.best_clients_default_limit must be positive")

        if config.app.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            issues.append(f"Unknown log level: {config.app.log_level}")

        # Check database file is writable
        db_url = config.database.url
        if db_url.startswith("sqlite:///") and ":memory:" not in db_url:
            db_dir = Path(db_url.replace("sqlite:///", "")).parent
            if db_dir.exists() and not os.access(db_dir, os.W_OK):
                issues.append(f"Database directory is not writable: {db_dir}")

        return issues


# Global config manager instance
config_manager = ConfigManager()


def get_config() -> FreelanceConfig:
    """Get the current configuration."""
    return config_manager.load_config()


def get_database_url() -> str:
    """Get the database URL."""
    return get_config().database.url
