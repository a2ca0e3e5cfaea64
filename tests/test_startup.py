# tests/test_startup.py
import pytest
from fastapi import FastAPI
from pymongo.errors import ServerSelectionTimeoutError

import app.main as main_module
from app import database
from app.config import ConfigurationError, Settings, load_settings
from app.errors import DatabaseConnectionError


@pytest.fixture
def clean_env(monkeypatch):
    # setenv then delenv so anything load_dotenv writes is removed on teardown
    for key in ("MONGO_URI", "MONGO_DB_NAME", "MONGO_COLLECTION", "LOG_LEVEL"):
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    return monkeypatch


def test_missing_mongo_uri_is_a_configuration_error(clean_env, tmp_path):
    with pytest.raises(ConfigurationError, match="MONGO_URI"):
        load_settings(env_file=str(tmp_path / ".env"))


def test_settings_defaults(clean_env, tmp_path):
    clean_env.setenv("MONGO_URI", "mongodb://db:27017")
    settings = load_settings(env_file=str(tmp_path / ".env"))
    assert settings == Settings(mongo_uri="mongodb://db:27017")
    assert settings.db_name == "productdb"
    assert settings.collection_name == "products"


def test_settings_from_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("MONGO_URI=mongodb://from-file:27017\nMONGO_DB_NAME=shop\nLOG_LEVEL=debug\n")
    settings = load_settings(env_file=str(env_file))
    assert settings.mongo_uri == "mongodb://from-file:27017"
    assert settings.db_name == "shop"
    assert settings.log_level == "DEBUG"


class _FakeAdmin:
    def __init__(self, error=None):
        self.error = error
        self.commands = []

    def command(self, name):
        self.commands.append(name)
        if self.error:
            raise self.error
        return {"ok": 1.0}


class _FakeMongoClient:
    ping_error = None
    instances = []

    def __init__(self, uri):
        self.uri = uri
        self.admin = _FakeAdmin(self.ping_error)
        _FakeMongoClient.instances.append(self)

    def __getitem__(self, db_name):
        return {"products": f"{db_name}.products", "items": f"{db_name}.items"}


@pytest.fixture
def fake_mongo(monkeypatch):
    _FakeMongoClient.ping_error = None
    _FakeMongoClient.instances = []
    monkeypatch.setattr(database, "MongoClient", _FakeMongoClient)
    return _FakeMongoClient


def test_connect_pings_and_returns_store(fake_mongo):
    store = database.connect(Settings(mongo_uri="mongodb://db:27017", db_name="shop"))
    client = fake_mongo.instances[0]
    assert client.uri == "mongodb://db:27017"
    assert client.admin.commands == ["ping"]
    assert store.collection == "shop.products"


def test_connect_failed_ping_is_fatal(fake_mongo):
    fake_mongo.ping_error = ServerSelectionTimeoutError("no servers found")
    with pytest.raises(DatabaseConnectionError, match="no servers found"):
        database.connect(Settings(mongo_uri="mongodb://db:27017"))


def test_connect_invalid_uri_is_fatal():
    with pytest.raises(DatabaseConnectionError):
        database.connect(Settings(mongo_uri="not-a-mongo-uri"))


def test_main_exits_without_configuration(monkeypatch):
    def _raise(*args, **kwargs):
        raise ConfigurationError("Required environment variable 'MONGO_URI' is not set.")

    monkeypatch.setattr(main_module, "load_settings", _raise)
    with pytest.raises(SystemExit) as exc:
        main_module.main()
    assert exc.value.code == 1


def test_main_exits_when_database_unreachable(monkeypatch):
    def _raise(settings):
        raise DatabaseConnectionError("cannot connect to MongoDB")

    monkeypatch.setattr(main_module, "load_settings", lambda: Settings(mongo_uri="mongodb://db:27017"))
    monkeypatch.setattr(main_module, "connect", _raise)
    monkeypatch.setattr(main_module.uvicorn, "run", lambda *a, **kw: pytest.fail("server must not start"))
    with pytest.raises(SystemExit) as exc:
        main_module.main()
    assert exc.value.code == 1


def test_main_serves_on_fixed_port(monkeypatch, collection):
    served = {}

    def _run(app, host, port):
        served.update(app=app, host=host, port=port)

    monkeypatch.setattr(main_module, "load_settings", lambda: Settings(mongo_uri="mongodb://db:27017"))
    monkeypatch.setattr(main_module, "connect", lambda settings: database.ProductStore(collection))
    monkeypatch.setattr(main_module.uvicorn, "run", _run)

    main_module.main()
    assert isinstance(served["app"], FastAPI)
    assert served["port"] == 5000
    assert served["host"] == "0.0.0.0"
