"""Tests for request configuration."""

import json

import pytest
from plainhttp import HttpRequest, UnexpectedSchemeError
from plainhttp.config import RequestConfig
from plainhttp.testing import RecordingTransport


class TestFromDict:
    """Tests for RequestConfig.from_dict validation."""

    def test_minimal(self):
        """Test defaults filled in around a bare URL."""
        config = RequestConfig.from_dict({"url": "http://test.com"})

        assert config.url == "http://test.com"
        assert config.port is None
        assert config.timeout is None
        assert config.method == "GET"
        assert config.path == "/"
        assert config.headers == {}
        assert config.params == {}
        assert config.log_level == "WARNING"

    def test_full(self):
        """Test every field is carried over."""
        config = RequestConfig.from_dict(
            {
                "url": "http://test.com",
                "port": 8080,
                "timeout": 5,
                "method": "POST",
                "path": "/submit",
                "headers": {"Accept": "text/plain"},
                "params": {"name": "value", "flag": None},
                "log_level": "debug",
                "log_file": "run.log",
            }
        )

        assert config.port == 8080
        assert config.timeout == 5
        assert config.method == "POST"
        assert config.params == {"name": "value", "flag": None}
        assert config.log_level == "DEBUG"
        assert config.log_file == "run.log"

    @pytest.mark.parametrize(
        "config_dict,message",
        [
            ({}, "url is required"),
            ({"url": "http://test.com", "port": "80"}, "port must be an integer"),
            ({"url": "http://test.com", "timeout": 1.5}, "timeout must be an integer"),
            ({"url": "http://test.com", "port": True}, "port must be an integer"),
            ({"url": "http://test.com", "path": "search"}, "path must start with"),
            ({"url": "http://test.com", "headers": ["Accept"]}, "headers must be a mapping"),
            ({"url": "http://test.com", "params": "a=1"}, "params must be a mapping"),
            ({"url": "http://test.com", "log_level": "LOUD"}, "Invalid log_level"),
        ],
    )
    def test_invalid_values(self, config_dict, message):
        """Test validation errors."""
        with pytest.raises(ValueError, match=message):
            RequestConfig.from_dict(config_dict)

    def test_non_mapping_rejected(self):
        """Test that a non-dict document is rejected."""
        with pytest.raises(ValueError, match="mapping"):
            RequestConfig.from_dict(["http://test.com"])


class TestFiles:
    """Tests for loading and saving config files."""

    def test_json_round_trip(self, tmp_path):
        """Test saving and loading JSON."""
        path = tmp_path / "request.json"
        RequestConfig(url="http://test.com", timeout=5, params={"q": "x"}).save_json(path)

        loaded = RequestConfig.from_file(path)
        assert loaded.to_dict() == {
            "url": "http://test.com",
            "method": "GET",
            "path": "/",
            "log_level": "WARNING",
            "timeout": 5,
            "params": {"q": "x"},
        }

    def test_yaml_load(self, tmp_path):
        """Test loading YAML, preserving header and param order."""
        pytest.importorskip("yaml")
        path = tmp_path / "request.yaml"
        path.write_text(
            "url: http://test.com:8080\n"
            "method: POST\n"
            "headers:\n"
            "  Content-Type: php/test\n"
            "  User-Agent: php\n"
            "params:\n"
            "  b: 2\n"
            "  a:\n"
        )

        config = RequestConfig.from_file(path)
        assert config.method == "POST"
        assert list(config.headers) == ["Content-Type", "User-Agent"]
        assert config.params == {"b": 2, "a": None}

    def test_yaml_save(self, tmp_path):
        """Test writing YAML."""
        yaml = pytest.importorskip("yaml")
        path = tmp_path / "request.yml"
        RequestConfig(url="http://test.com", headers={"Accept": "text/plain"}).save_yaml(path)

        assert yaml.safe_load(path.read_text())["headers"] == {"Accept": "text/plain"}

    def test_missing_file(self, tmp_path):
        """Test that a missing file is reported."""
        with pytest.raises(FileNotFoundError):
            RequestConfig.from_file(tmp_path / "missing.json")

    def test_unknown_suffix(self, tmp_path):
        """Test that unknown formats are rejected."""
        with pytest.raises(ValueError, match="Unsupported config file format"):
            RequestConfig.from_file(tmp_path / "request.toml")

    def test_json_validation_applies(self, tmp_path):
        """Test that file contents go through from_dict validation."""
        path = tmp_path / "request.json"
        path.write_text(json.dumps({"url": "http://test.com", "port": "eighty"}))

        with pytest.raises(ValueError, match="port"):
            RequestConfig.from_file(path)


class TestBuildRequest:
    """Tests for RequestConfig.build_request."""

    def test_url_port_adopted_without_overrides(self):
        """Test that the URL port is used when port and timeout are unset."""
        request = RequestConfig(url="http://test.com:8080").build_request(transport=RecordingTransport())

        assert isinstance(request, HttpRequest)
        assert request.get_hostname() == "test.com"
        assert request.get_port() == 8080
        assert request.get_timeout() == 60

    def test_explicit_port_and_timeout(self):
        """Test that configured port and timeout win."""
        request = RequestConfig(url="http://test.com:8080", port=81, timeout=5).build_request(
            transport=RecordingTransport()
        )

        assert request.get_port() == 81
        assert request.get_timeout() == 5

    def test_headers_and_params_applied_in_order(self):
        """Test that headers and params reach the request in order."""
        transport = RecordingTransport()
        config = RequestConfig(
            url="http://test.com",
            headers={"Content-Type": "php/test", "User-Agent": "php"},
            params={"param": "value", "other": None},
        )

        config.build_request(transport=transport).execute(config.path, config.method)

        assert transport.last_request.url == "http://test.com/?param=value&other"
        assert transport.last_request.header_block == "Content-Type: php/test\r\nUser-Agent: php"

    def test_bad_scheme_raises(self):
        """Test that target validation errors propagate."""
        with pytest.raises(UnexpectedSchemeError):
            RequestConfig(url="https://test.com").build_request(transport=RecordingTransport())
