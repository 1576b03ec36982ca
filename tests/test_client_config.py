#!/usr/bin/env python3
"""Tests for client configuration layering"""

# pylint: disable=redefined-outer-name

import json

import pytest

from denounce import DenounceClientConfig, DenounceError, ReceiverProtocol


@pytest.fixture
def clean_env(monkeypatch):
    """no DENOUNCE_* variables"""
    for name in ("DENOUNCE_CONFIG_FILE", "DENOUNCE_HOST", "DENOUNCE_TEXT_PORT", "DENOUNCE_HEOS_PORT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):  # pylint: disable=unused-argument
    """built-in defaults"""
    config = DenounceClientConfig()
    assert config.default_host == "192.168.0.209"
    assert config.text_port == 23
    assert config.heos_port == 1255
    assert config.port_for(ReceiverProtocol.TEXT) == 23
    assert config.port_for(ReceiverProtocol.HEOS) == 1255


def test_env_overrides(clean_env):
    """environment variables override defaults"""
    clean_env.setenv("DENOUNCE_HOST", "10.1.2.3")
    clean_env.setenv("DENOUNCE_TEXT_PORT", "2323")
    clean_env.setenv("DENOUNCE_HEOS_PORT", "12550")
    config = DenounceClientConfig()
    assert config.default_host == "10.1.2.3"
    assert config.text_port == 2323
    assert config.heos_port == 12550


def test_explicit_args_override_env(clean_env):
    """constructor arguments win over the environment"""
    clean_env.setenv("DENOUNCE_HOST", "10.1.2.3")
    config = DenounceClientConfig("avr.local", heos_port=4000)
    assert config.default_host == "avr.local"
    assert config.heos_port == 4000
    assert config.text_port == 23


def test_config_file(clean_env, tmp_path):
    """DENOUNCE_CONFIG_FILE is read, and env vars still win over it"""
    config_file = tmp_path / "denounce.json"
    config_file.write_text(json.dumps({"default_host": "file-host", "text_port": 24, "heos_port": 1256}))
    clean_env.setenv("DENOUNCE_CONFIG_FILE", str(config_file))
    clean_env.setenv("DENOUNCE_HEOS_PORT", "1300")
    config = DenounceClientConfig()
    assert config.default_host == "file-host"
    assert config.text_port == 24
    assert config.heos_port == 1300
    assert DenounceClientConfig(use_config_file=False).default_host == "192.168.0.209"


def test_from_config_file(clean_env, tmp_path):  # pylint: disable=unused-argument
    """a config file can be loaded directly"""
    config_file = tmp_path / "denounce.json"
    config_file.write_text(json.dumps({"default_host": "file-host"}))
    config = DenounceClientConfig.from_config_file(str(config_file))
    assert config.default_host == "file-host"
    assert config.heos_port == 1255


def test_base_config(clean_env):  # pylint: disable=unused-argument
    """a base config is copied, then overridden"""
    base = DenounceClientConfig("base-host", text_port=99, use_config_file=False)
    config = DenounceClientConfig(heos_port=98, base_config=base)
    assert config.default_host == "base-host"
    assert config.text_port == 99
    assert config.heos_port == 98
    assert base.heos_port == 1255


def test_json(clean_env):  # pylint: disable=unused-argument
    """to_json output is accepted by from_json"""
    config = DenounceClientConfig("json-host", text_port=5, heos_port=6)
    copy = DenounceClientConfig.from_json(config.to_json(), use_config_file=False)
    assert copy.to_jsonable() == {"default_host": "json-host", "text_port": 5, "heos_port": 6}


@pytest.mark.parametrize("value", ["telnet", "0", "70000"])
def test_invalid_port(clean_env, value):
    """ports must be integers in range"""
    clean_env.setenv("DENOUNCE_TEXT_PORT", value)
    with pytest.raises(DenounceError):
        DenounceClientConfig()
