import json

import pytest
from pydantic import ValidationError

from httpdiag.service.config import DEFAULT_PORT, Configuration, load_config
from httpdiag.service.errors import ConfigParseError, ConfigReadError


def _write(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(path)


@pytest.mark.parametrize("path", [None, ""])
def test_no_config_file_uses_default_port_without_tls(path):
    cfg = load_config(path)
    assert cfg.port == DEFAULT_PORT == 8888
    assert cfg.tls_cert_path is None
    assert cfg.tls_key_path is None
    assert cfg.tls_enabled is False


def test_config_file_fields(tmp_path):
    path = _write(tmp_path, {"port": 9443, "servercrt": "/etc/tls/server.crt", "serverkey": "/etc/tls/server.key"})
    cfg = load_config(path)
    assert cfg.port == 9443
    assert cfg.tls_cert_path == "/etc/tls/server.crt"
    assert cfg.tls_key_path == "/etc/tls/server.key"
    assert cfg.tls_enabled is True


def test_config_file_without_port_leaves_port_unset(tmp_path):
    cfg = load_config(_write(tmp_path, {"servercrt": "a.crt"}))
    assert cfg.port == 0
    assert cfg.tls_enabled is False


def test_unknown_keys_are_ignored(tmp_path):
    cfg = load_config(_write(tmp_path, {"port": 1234, "verbose": True}))
    assert cfg.port == 1234


def test_tls_needs_both_paths():
    assert Configuration(port=1, servercrt="a.crt").tls_enabled is False
    assert Configuration(port=1, serverkey="a.key").tls_enabled is False
    assert Configuration(port=1, servercrt="", serverkey="a.key").tls_enabled is False
    assert Configuration(port=1, tls_cert_path="a.crt", tls_key_path="a.key").tls_enabled is True


def test_configuration_is_immutable():
    cfg = Configuration(port=8888)
    with pytest.raises(ValidationError):
        cfg.port = 1


def test_missing_file_raises_read_error(tmp_path):
    with pytest.raises(ConfigReadError):
        load_config(str(tmp_path / "absent.json"))


@pytest.mark.parametrize("payload", ["{not json", '{"port": "8080"}', "[1, 2]"])
def test_malformed_config_raises_parse_error(tmp_path, payload):
    with pytest.raises(ConfigParseError):
        load_config(_write(tmp_path, payload))


def test_null_port_is_unset(tmp_path):
    cfg = load_config(_write(tmp_path, {"port": None, "serverkey": None}))
    assert cfg.port == 0
    assert cfg.tls_key_path is None
