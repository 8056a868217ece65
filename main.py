"""
kagi - ask Kagi FastGPT a question from the command line.

Usage:
  kagi [flags] query words ...
  echo "query" | kagi [flags]
"""

import argparse
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TextIO

from api.base_client import BaseAnswerClient
from api.kagi_client import KagiFastGPTClient
from config.config import Config
from models.errors import KagiCLIError, MissingCredentialError, RemoteCallError, UsageError
from orchestrator.core import QueryOrchestrator
from orchestrator.input_resolver import resolve_query
from utils.logger import LoggerConfig, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Command:
    query: str
    kagi_api_key: str
    cache_dir: str = ""
    verbose: bool = False


class CommandArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message: str):
        raise UsageError(f"failed to parse flags: {message}")


def build_parser(config: Config, prog: str = "kagi") -> CommandArgumentParser:
    parser = CommandArgumentParser(
        prog=prog,
        description="Ask the Kagi FastGPT API a question and print the answer as Markdown.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-kagi_api_key",
        "--kagi_api_key",
        dest="kagi_api_key",
        default=config.KAGI_API_KEY,
        help="API key to use with the Kagi FastGPT API (default: $KAGI_API_KEY)",
    )
    parser.add_argument(
        "-cache_dir",
        "--cache_dir",
        dest="cache_dir",
        default=config.CACHE_DIR,
        help="Directory to cache API responses in. If not set, responses will not be cached.",
    )
    parser.add_argument(
        "-verbose",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    # Flags end at the first query word; later dash words belong to the query
    parser.add_argument(
        "query",
        nargs=argparse.REMAINDER,
        help="Query text; read from stdin when omitted",
    )
    return parser


def parse_command(
    parser: argparse.ArgumentParser,
    argv: Sequence[str],
    stdin: TextIO,
    stderr: TextIO,
) -> Command:
    """
    Parse flags, check the credential and resolve the query.

    Raises:
        UsageError: On bad flags or an empty query
        MissingCredentialError: If no API key is available
    """
    args = parser.parse_args(list(argv))

    api_key = (args.kagi_api_key or "").strip()
    if not api_key:
        raise MissingCredentialError("missing Kagi API key")

    query = resolve_query(args.query, stdin, stderr)
    return Command(
        query=query,
        kagi_api_key=api_key,
        cache_dir=args.cache_dir or "",
        verbose=args.verbose,
    )


def default_client_factory(command: Command, config: Config) -> BaseAnswerClient:
    return KagiFastGPTClient(
        api_key=command.kagi_api_key,
        base_url=config.API_BASE_URL,
        timeout=config.TIMEOUT_SECONDS,
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    config: Config | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    client_factory: Callable[[Command, Config], BaseAnswerClient] | None = None,
) -> int:
    """
    Run one invocation and return the process exit code.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])
        config: Injected configuration (default: Config.from_env())
        stdin, stdout, stderr: Streams (default: the sys streams)
        client_factory: Builds the API client from the parsed command

    Returns:
        0 on success, 1 on any usage, credential or remote-call error
    """
    argv = sys.argv[1:] if argv is None else argv
    config = config or Config.from_env()
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    client_factory = client_factory or default_client_factory

    parser = build_parser(config)

    try:
        command = parse_command(parser, argv, stdin, stderr)
    except KagiCLIError as e:
        print(e.message, file=stderr)
        if e.show_usage:
            parser.print_help(stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print("\nExiting...", file=stderr)
        return 130

    LoggerConfig.set_verbose(command.verbose)

    try:
        client = client_factory(command, config)
        orchestrator = QueryOrchestrator(
            client=client,
            stdout=stdout,
            cache_dir=command.cache_dir,
            verbose=command.verbose,
        )
        orchestrator.ask(command.query)
    except RemoteCallError as e:
        logger.debug("Remote call failed", exc_info=True)
        print(f"error performing query: {e.message}", file=stderr)
        return e.exit_code
    except KagiCLIError as e:
        print(e.message, file=stderr)
        if e.show_usage:
            parser.print_help(stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print("\nExiting...", file=stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
