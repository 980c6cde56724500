"""
Tests for the login input validator.
"""

import logging

import pytest

from jolokia_api_server.validation import InputValidator


@pytest.fixture
def dev_validator(dev_settings):
    return InputValidator(dev_settings)


@pytest.fixture
def prod_validator(prod_settings):
    return InputValidator(prod_settings)


@pytest.mark.parametrize("port", ["1", "80", "8161", "65535"])
def test_port_accepted(dev_validator, prod_validator, port):
    assert dev_validator.validate_port(port) == port
    assert prod_validator.validate_port(port) == port


@pytest.mark.parametrize("port", [
    "0",
    "65536",
    "-1",
    "+8161",
    "08161",
    " 8161",
    "8161 ",
    "8_161",
    "8161.0",
    "1e3",
    "0x1F90",
    "٨١٦١",  # Arabic-Indic digits
    "",
    "port",
    None,
])
def test_port_rejected(dev_validator, port):
    assert dev_validator.validate_port(port) is None


def test_port_rejection_logs_value(dev_validator, caplog):
    with caplog.at_level(logging.WARNING, logger="jolokia_api_server.validation"):
        dev_validator.validate_port("99999")

    assert "invalid port" in caplog.text
    assert "99999" in caplog.text


@pytest.mark.parametrize("host", ["localhost", "10.0.0.1", "anything at all", ""])
def test_host_passthrough_outside_production(dev_validator, host):
    assert dev_validator.validate_host(host) == host


def test_host_requires_marker_in_production(prod_validator, caplog):
    assert prod_validator.validate_host("broker-wconsj-0.svc") == "broker-wconsj-0.svc"

    with caplog.at_level(logging.WARNING, logger="jolokia_api_server.validation"):
        assert prod_validator.validate_host("evil.example.com") is None
    assert "evil.example.com" in caplog.text


def test_host_none_rejected_in_production(prod_validator):
    assert prod_validator.validate_host(None) is None


def test_host_marker_is_configurable(dev_settings):
    settings = dev_settings.model_copy(update={"NODE_ENV": "production", "PRODUCTION_HOST_MARKER": "amq"})
    validator = InputValidator(settings)

    assert validator.validate_host("amq-broker-0") == "amq-broker-0"
    assert validator.validate_host("broker-wconsj-0") is None


@pytest.mark.parametrize("scheme", ["http", "https"])
def test_scheme_accepted_in_production(prod_validator, scheme):
    assert prod_validator.validate_scheme(scheme) == scheme


@pytest.mark.parametrize("scheme", ["ftp", "HTTP", "https ", "", None])
def test_scheme_rejected_in_production(prod_validator, scheme):
    assert prod_validator.validate_scheme(scheme) is None


@pytest.mark.parametrize("scheme", ["ftp", "HTTP", "gopher"])
def test_scheme_passthrough_outside_production(dev_validator, scheme):
    assert dev_validator.validate_scheme(scheme) == scheme
