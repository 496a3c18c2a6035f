"""Tests for extraction configuration."""

from pathlib import Path

import pytest

from schema_catalog.config import ConfigError, ExtractionConfig, load_config


@pytest.fixture
def sqlite_file(tmp_path):
    path = tmp_path / "app.db"
    path.touch()
    return path


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        config = load_config(None)
        assert config.source == "sqlite"
        assert config.table_types == ["TABLE"]
        assert config.database is None

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "source: sqlite\n"
            "database: main\n"
            "sqlite_path: ./app.db\n"
            "table_types: TABLE, VIEW\n"
            "output: out/app.json\n"
        )

        config = load_config(path)

        assert config.database == "main"
        assert config.sqlite_path == Path("./app.db")
        assert config.table_types == ["TABLE", "VIEW"]
        assert config.output == Path("out/app.json")

    def test_numeric_database_name(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("database: 123\n")

        config = load_config(path)

        assert config.database == "123"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml")

    def test_unknown_keys(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("database: main\nschema: CORE\n")
        with pytest.raises(ConfigError, match="schema"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- main\n- other\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestExtractionConfig:
    """Tests for merging and validation."""

    def test_merge_ignores_none(self):
        config = ExtractionConfig(database="main").merge(database=None, source="oracle")
        assert config.database == "main"
        assert config.source == "oracle"

    def test_valid_sqlite(self, sqlite_file):
        ExtractionConfig(database="main", sqlite_path=sqlite_file).validate()

    @pytest.mark.parametrize("kwargs,message", [
        ({"source": "mysql", "database": "main"}, "Unknown source"),
        ({"source": "sqlite"}, "database name"),
        ({"source": "sqlite", "database": "main"}, "sqlite_path"),
        ({"source": "sqlite", "database": "main", "sqlite_path": "/nonexistent/app.db"}, "not found"),
        ({"source": "oracle", "database": "APP"}, "oracle_conn"),
        ({"source": "oracle", "database": "APP", "oracle_conn": "u/p@h:1521/s", "table_types": []}, "table type"),
    ])
    def test_invalid(self, kwargs, message):
        with pytest.raises(ConfigError, match=message):
            ExtractionConfig(**kwargs).validate()
