"""Tests for Config loading: env vars, YAML file and access control validation."""

import logging
from pathlib import Path

import pytest

from quill.config import AccessControlConfig, Config, LoggingConfig, configure_logging
from quill.domain.shared.error import ConfigurationError


class TestDefaults:
    def test_conflict_defaults(self) -> None:
        access = AccessControlConfig()

        assert access.static_conflicts == [["MODERATOR", "ADMIN"]]
        assert access.dynamic_conflicts == [["USER", "MEMBER"]]
        assert access.seed_on_startup is True

    def test_database_url_derived_from_data_dir(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.delenv("QUILL_DATABASE__URL", raising=False)
        monkeypatch.setenv("QUILL_DATA_DIR", str(tmp_path))

        config = Config()

        assert config.database.url == f"sqlite+aiosqlite:///{tmp_path / 'quill.db'}"

    def test_jwt_secret_read_from_env(self) -> None:
        # Set by the top-level conftest
        assert Config().auth.jwt.secret == "test-secret-for-unit-tests-min-32"


class TestSources:
    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QUILL_DATABASE__URL", "postgresql+asyncpg://quill@db/quill")
        monkeypatch.setenv("QUILL_ACCESS__SEED_ON_STARTUP", "false")

        config = Config()

        assert config.database.url == "postgresql+asyncpg://quill@db/quill"
        assert config.access.seed_on_startup is False

    def test_yaml_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "quill.yaml"
        config_file.write_text(
            "access:\n"
            "  static_conflicts:\n"
            "    - [AUDITOR, ADMIN]\n"
            "  dynamic_conflicts: []\n"
            "server:\n"
            "  name: Quill Test\n"
        )
        monkeypatch.setenv("QUILL_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.server.name == "Quill Test"
        assert config.access.static_conflicts == [["AUDITOR", "ADMIN"]]
        assert config.access.dynamic_conflicts == []

    def test_env_beats_yaml(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "quill.yaml"
        config_file.write_text("server:\n  name: From YAML\n")
        monkeypatch.setenv("QUILL_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("QUILL_SERVER__NAME", "From Env")

        assert Config().server.name == "From Env"


class TestAccessControlValidation:
    @pytest.mark.parametrize(
        "pairs",
        [
            [["ADMIN"]],
            [["ADMIN", "MODERATOR", "USER"]],
            [["ADMIN", " "]],
            [["ADMIN", "ADMIN"]],
        ],
    )
    def test_malformed_static_pairs_rejected(self, pairs: list[list[str]]) -> None:
        with pytest.raises(ConfigurationError):
            AccessControlConfig(static_conflicts=pairs)

    def test_malformed_dynamic_pairs_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            AccessControlConfig(dynamic_conflicts=[["USER"]])


class TestConfigureLogging:
    def test_log_file_from_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "quill.log"
        monkeypatch.setenv("QUILL_LOG_FILE", str(log_file))

        configure_logging(LoggingConfig(level="INFO"))
        logging.getLogger("quill.test").info("hello from test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello from test" in log_file.read_text()

        root = logging.getLogger()
        for handler in root.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
