"""Tests for the command-line interface."""

import json

import pytest
from plainhttp import TransportError
from plainhttp.cli import create_parser, get_config, main, parse_header, parse_param
from plainhttp.testing import RecordingTransport


@pytest.fixture
def transport():
    """Create a recording transport."""
    return RecordingTransport()


class TestArgumentParsing:
    """Tests for argument helpers."""

    def test_parse_header(self):
        """Test splitting a header argument."""
        assert parse_header("Content-Type: text/plain") == ("Content-Type", "text/plain")
        assert parse_header("X-Time:12:30") == ("X-Time", "12:30")

    @pytest.mark.parametrize("raw", ["no colon", ": value"])
    def test_parse_header_invalid(self, raw):
        """Test rejecting malformed header arguments."""
        with pytest.raises(ValueError, match="Invalid header"):
            parse_header(raw)

    def test_parse_param(self):
        """Test splitting parameter arguments."""
        assert parse_param("name=value") == ("name", "value")
        assert parse_param("name=") == ("name", "")
        assert parse_param("flag") == ("flag", None)
        assert parse_param("a=b=c") == ("a", "b=c")

    def test_cli_overrides_config_file(self, tmp_path):
        """Test that flags win over file values and merge headers/params."""
        path = tmp_path / "request.json"
        path.write_text(
            json.dumps(
                {
                    "url": "http://file.com",
                    "method": "PUT",
                    "headers": {"Accept": "text/html"},
                    "params": {"a": "1"},
                }
            )
        )
        args = create_parser().parse_args(
            ["--config", str(path), "-X", "POST", "-H", "Accept: text/plain", "-d", "b", "--timeout", "5", "-v"]
        )

        config = get_config(args)
        assert config.url == "http://file.com"
        assert config.method == "POST"
        assert config.timeout == 5
        assert config.headers == {"Accept": "text/plain"}
        assert config.params == {"a": "1", "b": None}
        assert config.log_level == "DEBUG"

    def test_url_or_config_required(self):
        """Test that a target is mandatory."""
        with pytest.raises(ValueError, match="URL or --config"):
            get_config(create_parser().parse_args([]))


class TestMain:
    """Tests for the CLI entry point."""

    def test_get_prints_body(self, transport, capsys):
        """Test a GET run end to end."""
        transport.add_response(b"hello")

        code = main(["http://test.com:8080", "-p", "/search", "-d", "q=a b", "-d", "flag"], transport=transport)

        assert code == 0
        assert capsys.readouterr().out == "hello\n"
        assert transport.last_request.url == "http://test.com:8080/search?q=a+b&flag"
        assert transport.last_request.method == "GET"

    def test_post_sends_body_and_headers(self, transport, capsys):
        """Test a POST run with headers."""
        transport.add_response(b"created\n")

        code = main(
            ["http://test.com", "-X", "POST", "-d", "name=value", "-H", "User-Agent: php"],
            transport=transport,
        )

        assert code == 0
        assert capsys.readouterr().out == "created\n"
        assert transport.last_request.url == "http://test.com/"
        assert transport.last_request.body == "name=value"
        assert transport.last_request.headers == {"User-Agent": "php"}

    def test_port_flag_overrides_url_port(self, transport):
        """Test that --port wins over the URL port."""
        assert main(["http://test.com:8080", "--port", "9090"], transport=transport) == 0
        assert transport.last_request.url == "http://test.com:9090/"

    def test_invalid_scheme_exits_1(self, transport, capsys):
        """Test that validation errors are reported."""
        code = main(["https://test.com"], transport=transport)

        assert code == 1
        assert "Only HTTP requests permitted" in capsys.readouterr().err
        assert transport.requests == []

    def test_zero_timeout_exits_1(self, capsys):
        """Test that --timeout 0 is reported instead of crashing."""
        code = main(["http://127.0.0.1", "--port", "9", "--timeout", "0"])

        assert code == 1
        err = capsys.readouterr().err
        assert "Error: Failed to open http://127.0.0.1:9/" in err

    def test_transport_failure_exits_1(self, transport, capsys):
        """Test that transport errors are reported."""
        transport.add_failure(TransportError("Connection refused"))

        code = main(["http://test.com"], transport=transport)

        assert code == 1
        assert "Connection refused" in capsys.readouterr().err

    def test_bad_header_exits_1(self, transport, capsys):
        """Test that malformed header flags are reported."""
        code = main(["http://test.com", "-H", "broken"], transport=transport)

        assert code == 1
        assert "Invalid header" in capsys.readouterr().err

    def test_missing_config_exits_1(self, tmp_path, capsys):
        """Test that a missing config file is reported."""
        code = main(["--config", str(tmp_path / "missing.json")])

        assert code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_generate_json_config(self, tmp_path):
        """Test writing a sample JSON config."""
        path = tmp_path / "sample.json"

        assert main(["--generate-config", str(path)]) == 0

        data = json.loads(path.read_text())
        assert data["url"] == "http://example.com"
        assert data["params"] == {"q": "plainhttp", "verbose": None}

    def test_generate_yaml_config(self, tmp_path):
        """Test writing a sample YAML config that loads back."""
        pytest.importorskip("yaml")
        path = tmp_path / "sample.yaml"

        assert main(["--generate-config", str(path)]) == 0

        from plainhttp.config import RequestConfig

        assert RequestConfig.from_file(path).path == "/search"

    def test_version(self, capsys):
        """Test --version output."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "plainhttp" in capsys.readouterr().out
