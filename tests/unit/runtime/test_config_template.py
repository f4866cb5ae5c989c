"""Unit tests for config template loading."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import (
    apply_environment_overrides,
    load_templated_yaml,
    substitute_env_vars,
)

CONFIG_YAML = """
config:
  app:
    environment: test
    port: ${APP_PORT:-5000}
  database:
    url: ${DATABASE_URL:-sqlite:///./catalog.db}
  catalog:
    store_backend: ${CATALOG_STORE_BACKEND:-database}
    pagination:
      default_limit: 5
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)
    return path


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "5000"}):
            result = substitute_env_vars("http://${HOST}:${PORT}/books")
            assert result == "http://localhost:5000/books"

    def test_default_used_when_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-memory}") == "memory"
            assert substitute_env_vars("${MISSING_VAR:-}") == ""

    def test_value_wins_over_default(self):
        with patch.dict(os.environ, {"CATALOG_STORE_BACKEND": "memory"}):
            assert substitute_env_vars("${CATALOG_STORE_BACKEND:-database}") == "memory"

    def test_required_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_required_var_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="database url needed"):
                substitute_env_vars("${DATABASE_URL:?database url needed}")


class TestEnvironmentOverrides:
    def test_prefixed_variables_are_copied(self):
        with patch.dict(
            os.environ, {"TEST_DATABASE_URL": "sqlite:///test.db"}, clear=True
        ):
            applied = apply_environment_overrides("test")

            assert applied == ["DATABASE_URL"]
            assert os.environ["DATABASE_URL"] == "sqlite:///test.db"


class TestLoadTemplatedYaml:
    def test_defaults_applied(self, config_file):
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(config_file, env_mode="test")

        assert isinstance(config, ConfigData)
        assert config.app.port == 5000
        assert config.database.url == "sqlite:///./catalog.db"
        assert config.catalog.store_backend == "database"
        assert config.catalog.pagination.default_limit == 5
        assert config.catalog.pagination.max_limit == 100

    def test_environment_values_used(self, config_file):
        with patch.dict(
            os.environ,
            {"CATALOG_STORE_BACKEND": "memory", "TEST_APP_PORT": "8080"},
            clear=True,
        ):
            config = load_templated_yaml(config_file, env_mode="test")

        assert config.catalog.store_backend == "memory"
        assert config.app.port == 8080

    def test_invalid_backend_is_rejected(self, config_file):
        with patch.dict(os.environ, {"CATALOG_STORE_BACKEND": "redis"}, clear=True):
            with pytest.raises(ValueError, match="Invalid configuration"):
                load_templated_yaml(config_file, env_mode="test")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("config: [unclosed")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "absent.yaml")

    def test_repository_config_file_loads(self):
        """The config.yaml shipped at the project root is valid."""
        root = Path(__file__).resolve().parents[3]
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(root / "config.yaml")

        assert config.app.docs_url == "/api-docs"
        assert "X-Total-Count" in config.app.cors.expose_headers
        assert config.logging.file in (None, "")
