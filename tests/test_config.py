"""
Tests for Settings Validation

Settings are built with _env_file=None and the relevant environment
variables removed, so the machine running the tests cannot leak values in.
"""

import pytest
from pydantic import ValidationError

from bookstore.config import Settings
from bookstore.database import build_database_url

DB_VARIABLES = ["DATABASE_URL", "DB_HOST", "DB_PORT", "DB_USER", "DB_PASS", "DB_NAME"]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in DB_VARIABLES + ["STORAGE_BACKEND", "APP_ADDRESS", "LOG_LEVEL", "API_PREFIX"]:
        monkeypatch.delenv(name, raising=False)


def make_settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


class TestStorageSettings:

    def test_sql_backend_requires_database_settings(self):
        with pytest.raises(ValidationError) as exc_info:
            make_settings(storage_backend="sql", db_host="localhost")

        message = str(exc_info.value)
        assert "DB_PORT" in message
        assert "DB_HOST" not in message

    def test_sql_backend_accepts_database_url(self):
        settings = make_settings(storage_backend="sql", database_url="sqlite:///books.db")

        assert settings.database_url == "sqlite:///books.db"

    def test_memory_backend_needs_no_database(self):
        assert make_settings(storage_backend="memory").storage_backend == "memory"

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(storage_backend="redis")

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "sql")
        monkeypatch.setenv("DB_HOST", "db.internal")
        monkeypatch.setenv("DB_PORT", "5433")
        monkeypatch.setenv("DB_USER", "books")
        monkeypatch.setenv("DB_PASS", "secret")
        monkeypatch.setenv("DB_NAME", "library")

        settings = make_settings()

        assert settings.db_host == "db.internal"
        assert settings.db_port == 5433

    def test_malformed_port_rejected(self, monkeypatch):
        monkeypatch.setenv("DB_PORT", "not-a-port")

        with pytest.raises(ValidationError):
            make_settings(storage_backend="memory")


class TestAddressSettings:

    @pytest.mark.parametrize(
        "address,host,port",
        [
            ("0.0.0.0:8080", "0.0.0.0", 8080),
            (":9000", "0.0.0.0", 9000),
            ("127.0.0.1:8001", "127.0.0.1", 8001),
        ],
    )
    def test_valid_addresses(self, address, host, port):
        settings = make_settings(storage_backend="memory", app_address=address)

        assert settings.host == host
        assert settings.port == port

    @pytest.mark.parametrize("address", ["localhost", "localhost:http", "host:0", ":70000"])
    def test_invalid_addresses(self, address):
        with pytest.raises(ValidationError):
            make_settings(storage_backend="memory", app_address=address)


class TestMiscSettings:

    def test_log_level_normalized(self):
        assert make_settings(storage_backend="memory", log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(storage_backend="memory", log_level="verbose")

    @pytest.mark.parametrize(
        "prefix,expected",
        [("", ""), ("/api/v1", "/api/v1"), ("api/v1/", "/api/v1")],
    )
    def test_api_prefix_normalized(self, prefix, expected):
        assert make_settings(storage_backend="memory", api_prefix=prefix).api_prefix == expected


class TestDatabaseUrl:

    def test_url_from_parts(self):
        settings = make_settings(
            storage_backend="sql",
            db_driver="mysql+pymysql",
            db_host="localhost",
            db_port=3306,
            db_user="books",
            db_pass="p@ss:word",
            db_name="library",
        )

        url = build_database_url(settings)

        assert url.drivername == "mysql+pymysql"
        assert url.host == "localhost"
        assert url.port == 3306
        assert url.username == "books"
        assert url.password == "p@ss:word"
        assert url.database == "library"

    def test_database_url_wins(self):
        settings = make_settings(
            storage_backend="sql",
            database_url="sqlite:///books.db",
            db_host="ignored",
        )

        url = build_database_url(settings)

        assert url.get_backend_name() == "sqlite"
        assert url.database == "books.db"
