import pytest
from fastapi.testclient import TestClient

from httpdiag.main import create_app
from httpdiag.service.config import Configuration


@pytest.fixture
def config():
    return Configuration(port=8888)


@pytest.fixture
def app(config):
    return create_app(config)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
