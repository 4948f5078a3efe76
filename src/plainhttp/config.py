import json
from pathlib import Path
from typing import Any, Optional

try:
    import yaml  # type: ignore
except ImportError:
    yaml = None  # type: ignore

from .request import HttpRequest
from .transport.protocols import Transport


class RequestConfig:
    """Configuration for a request run from a file or the command line."""

    VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    def __init__(
        self,
        url: str = "http://localhost",
        port: Optional[int] = None,
        timeout: Optional[int] = None,
        method: str = "GET",
        path: str = "/",
        headers: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        log_level: str = "WARNING",
        log_file: Optional[str] = None,
    ):
        """
        Initialize configuration.

        Args:
            url: Target URL (http:// only); an embedded port is honored
            port: Port number, overriding the URL's
            timeout: Timeout in seconds
            method: HTTP method
            path: Request path
            headers: Headers to send, in order
            params: Query parameters; None values become bare names
            log_level: Logging level
            log_file: Optional log file path
        """
        self.url = url
        self.port = port
        self.timeout = timeout
        self.method = method
        self.path = path
        self.headers = dict(headers or {})
        self.params = dict(params or {})
        self.log_level = log_level
        self.log_file = log_file

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RequestConfig":
        """
        Create configuration from dictionary.

        Args:
            config_dict: Configuration dictionary

        Returns:
            RequestConfig instance

        Raises:
            ValueError: If configuration values are invalid
        """
        if not isinstance(config_dict, dict):
            raise ValueError("Configuration must be a mapping")

        url = config_dict.get("url")
        if not isinstance(url, str) or not url:
            raise ValueError("url is required")

        for key in ("port", "timeout"):
            value = config_dict.get(key)
            if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
                raise ValueError(f"{key} must be an integer")

        path = config_dict.get("path", "/")
        if not isinstance(path, str) or not path.startswith("/"):
            raise ValueError("path must start with '/'")

        for key in ("headers", "params"):
            if not isinstance(config_dict.get(key) or {}, dict):
                raise ValueError(f"{key} must be a mapping")

        log_level = config_dict.get("log_level", "WARNING")
        if str(log_level).upper() not in cls.VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log_level. Must be one of: {cls.VALID_LOG_LEVELS}")

        return cls(
            url=url,
            port=config_dict.get("port"),
            timeout=config_dict.get("timeout"),
            method=str(config_dict.get("method", "GET")),
            path=path,
            headers=config_dict.get("headers"),
            params=config_dict.get("params"),
            log_level=str(log_level).upper(),
            log_file=config_dict.get("log_file"),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "RequestConfig":
        """
        Load configuration from YAML file.

        Raises:
            ImportError: If pyyaml is not installed
            FileNotFoundError: If config file doesn't exist
        """
        if yaml is None:
            raise ImportError("PyYAML is required for YAML config. Install with: pip install plainhttp[yaml]")

        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            config_dict = yaml.safe_load(f)

        return cls.from_dict(config_dict)

    @classmethod
    def from_json(cls, json_path: Path) -> "RequestConfig":
        """
        Load configuration from JSON file.

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        if not json_path.exists():
            raise FileNotFoundError(f"Config file not found: {json_path}")

        with open(json_path) as f:
            config_dict = json.load(f)

        return cls.from_dict(config_dict)

    @classmethod
    def from_file(cls, config_path: Path) -> "RequestConfig":
        """Load configuration from file (auto-detect format)."""
        suffix = config_path.suffix.lower()

        if suffix in [".yaml", ".yml"]:
            return cls.from_yaml(config_path)
        elif suffix == ".json":
            return cls.from_json(config_path)
        else:
            raise ValueError(f"Unsupported config file format: {suffix}")

    def to_dict(self) -> dict[str, Any]:
        """
        Convert configuration to dictionary.

        Returns:
            Configuration as dictionary
        """
        config: dict[str, Any] = {
            "url": self.url,
            "method": self.method,
            "path": self.path,
            "log_level": self.log_level,
        }

        if self.port is not None:
            config["port"] = self.port
        if self.timeout is not None:
            config["timeout"] = self.timeout
        if self.headers:
            config["headers"] = self.headers
        if self.params:
            config["params"] = self.params
        if self.log_file:
            config["log_file"] = self.log_file

        return config

    def save_yaml(self, yaml_path: Path) -> None:
        """
        Save configuration to YAML file.

        Raises:
            ImportError: If pyyaml is not installed
        """
        if yaml is None:
            raise ImportError("PyYAML is required for YAML config. Install with: pip install plainhttp[yaml]")

        with open(yaml_path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def save_json(self, json_path: Path) -> None:
        """Save configuration to JSON file."""
        with open(json_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def build_request(self, transport: Optional[Transport] = None) -> HttpRequest:
        """
        Create an initialized HttpRequest carrying this configuration.

        Args:
            transport: Transport for the request (defaults to RequestsTransport)

        Returns:
            HttpRequest ready to execute(self.path, self.method)

        Raises:
            InvalidArgumentError: If the target or a header/param is invalid
            UnexpectedSchemeError: If the URL is not http://
        """
        request = HttpRequest(transport=transport)
        request.initialize(self.url, self.port, self.timeout)

        for name, value in self.headers.items():
            request.add_header(name, value)
        for name, value in self.params.items():
            request.set_param(name, value)

        return request
