"""Command-line interface for plainhttp."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config import RequestConfig
from .errors import HttpRequestError
from .logging_config import setup_logging
from .request import HttpMethod
from .transport.protocols import Transport


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="plainhttp",
        description="Send one plain HTTP request and print the response body",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # GET with query parameters
  plainhttp http://example.com -p /search -d q=python -d verbose

  # POST form parameters with a custom header
  plainhttp http://example.com:8080 -X POST -p /submit -d name=value -H "Accept: text/plain"

  # Run a request described in a config file
  plainhttp --config request.yaml
        """,
    )

    parser.add_argument(
        "url",
        nargs="?",
        help="Target URL (http:// only)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    request_group = parser.add_argument_group("request")
    request_group.add_argument(
        "--method",
        "-X",
        default=None,
        help=f"HTTP method, e.g. {', '.join(m.value for m in HttpMethod)} (default: GET)",
    )
    request_group.add_argument(
        "--path",
        "-p",
        default=None,
        help="Request path (default: /)",
    )
    request_group.add_argument(
        "--header",
        "-H",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Add a request header (repeatable)",
    )
    request_group.add_argument(
        "--data",
        "-d",
        action="append",
        default=[],
        metavar="NAME[=VALUE]",
        help="Add a query parameter; sent in the body for methods other than GET/HEAD (repeatable)",
    )
    request_group.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port number, overriding the one in the URL (default: 80)",
    )
    request_group.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Timeout in seconds (default: 60)",
    )

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Load request settings from a YAML or JSON file",
    )
    config_group.add_argument(
        "--generate-config",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write a sample config file and exit",
    )

    logging_group = parser.add_argument_group("logging")
    log_level = logging_group.add_mutually_exclusive_group()
    log_level.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (default: WARNING)",
    )
    log_level.add_argument(
        "--verbose",
        "-v",
        dest="log_level",
        action="store_const",
        const="DEBUG",
        help="Verbose output (same as --log-level DEBUG)",
    )
    log_level.add_argument(
        "--quiet",
        "-q",
        dest="log_level",
        action="store_const",
        const="ERROR",
        help="Only log errors (same as --log-level ERROR)",
    )
    logging_group.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file",
    )

    return parser


def parse_header(raw: str) -> tuple[str, str]:
    """
    Split a "Name: value" header argument.

    Raises:
        ValueError: If the argument has no colon or an empty name
    """
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise ValueError(f"Invalid header '{raw}', expected 'Name: value'")
    return name.strip(), value.strip()


def parse_param(raw: str) -> tuple[str, Optional[str]]:
    """Split a "name=value" argument; a missing "=" means a bare name."""
    name, sep, value = raw.partition("=")
    return name, value if sep else None


def generate_sample_config(output_path: Path) -> None:
    """
    Generate a sample configuration file.

    Args:
        output_path: Path to save the config file
    """
    config = RequestConfig(
        url="http://example.com",
        timeout=60,
        path="/search",
        headers={"Accept": "text/plain"},
        params={"q": "plainhttp", "verbose": None},
    )

    if output_path.suffix.lower() == ".json":
        config.save_json(output_path)
    else:
        if output_path.suffix.lower() not in [".yaml", ".yml"]:
            output_path = output_path.with_suffix(".yaml")
        config.save_yaml(output_path)
    print(f"Sample config generated: {output_path}")


def get_config(args: argparse.Namespace) -> RequestConfig:
    """
    Get configuration from args and config file.

    Args:
        args: Parsed command-line arguments

    Returns:
        RequestConfig instance

    Raises:
        ValueError: If neither a URL nor a config file is given, or an argument is malformed
    """
    if args.config:
        config = RequestConfig.from_file(args.config)
    elif args.url:
        config = RequestConfig(url=args.url)
    else:
        raise ValueError("A URL or --config file is required")

    # Override with command-line arguments
    if args.url is not None:
        config.url = args.url
    if args.method is not None:
        config.method = args.method
    if args.path is not None:
        config.path = args.path
    if args.port is not None:
        config.port = args.port
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_file is not None:
        config.log_file = str(args.log_file)

    for raw in args.header:
        name, value = parse_header(raw)
        config.headers[name] = value
    for raw in args.data:
        name, value = parse_param(raw)
        config.params[name] = value

    return config


def run_request(config: RequestConfig, transport: Optional[Transport] = None) -> int:
    """
    Execute the configured request and print the response body.

    Args:
        config: Request configuration
        transport: Transport override (defaults to RequestsTransport)

    Returns:
        Exit code
    """
    logger = setup_logging(level=config.log_level, log_file=config.log_file, force=True)

    try:
        request = config.build_request(transport=transport)
        logger.info(f"Target: {request.get_hostname()}:{request.get_port()} (timeout {request.get_timeout()}s)")
        body = request.execute(config.path, config.method)
    except HttpRequestError as e:
        logger.debug("Request failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(body)
    if body and not body.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def main(argv: Optional[list[str]] = None, transport: Optional[Transport] = None) -> int:
    """
    Main entry point for CLI.

    Args:
        argv: Command-line arguments (for testing)
        transport: Transport override (for testing)

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.generate_config:
        try:
            generate_sample_config(args.generate_config)
            return 0
        except Exception as e:
            print(f"Error generating config: {e}", file=sys.stderr)
            return 1

    try:
        config = get_config(args)
    except (ValueError, OSError, ImportError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    return run_request(config, transport=transport)


if __name__ == "__main__":
    sys.exit(main())
