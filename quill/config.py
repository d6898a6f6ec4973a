import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self

from quill.domain.shared.error import ConfigurationError


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by QUILL_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("QUILL_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "Quill"
    version: str = "0.1.0"
    description: str = "Role-based access control for the Quill content platform"


class DatabaseConfig(BaseModel):
    """Database configuration (nested in Config, uses env_nested_delimiter).

    The url field uses empty string as sentinel to indicate "derive from
    QUILL_DATA_DIR". An explicit QUILL_DATABASE__URL is used as-is.
    """

    url: str = ""
    echo: bool = False
    auto_migrate: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from QUILL_LOG_FILE env var."""
        return os.environ.get("QUILL_LOG_FILE")


# =============================================================================
# Authentication Configuration
# =============================================================================


class JwtConfig(BaseModel):
    """JWT configuration. Tokens are issued elsewhere; Quill only verifies them."""

    secret: str = ""  # Must be set in production
    algorithm: str = "HS256"
    audience: str = "authenticated"
    access_token_expire_minutes: int = 60


class AuthConfig(BaseModel):
    """Authentication configuration."""

    jwt: JwtConfig = JwtConfig()


# =============================================================================
# Access Control Configuration
# =============================================================================


class AccessControlConfig(BaseModel):
    """Separation-of-duty constraints and seeding.

    Each constraint is a pair of role names that must not be held
    (static) or active (dynamic) together.
    """

    static_conflicts: list[list[str]] = [["MODERATOR", "ADMIN"]]
    dynamic_conflicts: list[list[str]] = [["USER", "MEMBER"]]
    seed_on_startup: bool = True

    @model_validator(mode="after")
    def validate_pairs(self) -> Self:
        for label, pairs in (
            ("static_conflicts", self.static_conflicts),
            ("dynamic_conflicts", self.dynamic_conflicts),
        ):
            for pair in pairs:
                if len(pair) != 2 or not all(name.strip() for name in pair):
                    raise ConfigurationError(
                        f"access.{label}: each constraint must name exactly two roles, got {pair!r}"
                    )
                if pair[0] == pair[1]:
                    raise ConfigurationError(
                        f"access.{label}: a role cannot conflict with itself ({pair[0]})"
                    )
        return self


class Config(BaseSettings):
    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    auth: AuthConfig = AuthConfig()
    access: AccessControlConfig = AccessControlConfig()

    model_config = {
        "env_prefix": "QUILL_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows QUILL_DATABASE__URL override
    }

    @model_validator(mode="after")
    def derive_database_url(self) -> Self:
        """Derive a SQLite database URL under QUILL_DATA_DIR when none is set."""
        if not self.database.url:
            data_dir = Path(os.environ.get("QUILL_DATA_DIR", "~/.local/share/quill")).expanduser()
            self.database = DatabaseConfig(
                url=f"sqlite+aiosqlite:///{data_dir / 'quill.db'}",
                echo=self.database.echo,
                auto_migrate=self.database.auto_migrate,
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - QUILL_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so every module logger
    picks up the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.INFO)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
