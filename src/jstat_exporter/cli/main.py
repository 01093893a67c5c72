"""
Command-line interface for the jstat exporter.

This module parses the command line, builds the configuration, sets up
logging and runs the exporter until it is stopped.
"""

import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import build_config
from ..models.config import (
    DEFAULT_INTERVAL_MS,
    DEFAULT_JPS_PATH,
    DEFAULT_JSTAT_PATH,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_METRICS_PATH,
    DEFAULT_RETRY_DELAY_SECONDS,
)
from ..system.commands import check_tool_installed
from ..validation import ValidationError, handle_cli_error
from .orchestrator import ExporterRunner

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser. Every option defaults to None so that values
    from the configuration file are only overridden when given."""
    parser = argparse.ArgumentParser(
        prog="jstat_exporter",
        description="Export JVM memory and GC statistics from jstat as Prometheus metrics.",
    )
    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        help=f"Address on which to expose metrics and web interface. Default: {DEFAULT_LISTEN_ADDRESS}",
    )
    parser.add_argument(
        "--web.telemetry-path",
        dest="metrics_path",
        help=f"Path under which to expose metrics. Default: {DEFAULT_METRICS_PATH}",
    )
    parser.add_argument(
        "--jstat.path",
        dest="jstat_path",
        help=f"jstat path. Default: {DEFAULT_JSTAT_PATH}",
    )
    parser.add_argument(
        "--jps.path",
        dest="jps_path",
        help=f"jps path. Default: {DEFAULT_JPS_PATH}",
    )
    parser.add_argument(
        "--target",
        dest="target",
        help="Target name of jps. Default: the first JVM listed by jps.",
    )
    parser.add_argument(
        "--interval",
        dest="interval_ms",
        help=f"Sampling interval of jstat in milliseconds. Default: {DEFAULT_INTERVAL_MS}",
    )
    parser.add_argument(
        "--retry-delay",
        dest="retry_delay_seconds",
        help=f"Seconds to wait before looking for the target JVM again. Default: {DEFAULT_RETRY_DELAY_SECONDS:g}",
    )
    parser.add_argument(
        "--log.level",
        dest="log_level",
        help="Only log messages with the given severity or above. Default: INFO",
    )
    parser.add_argument(
        "--config.file",
        dest="config_file",
        type=Path,
        help="Optional TOML file with an [exporter] table.",
    )
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides = vars(args).copy()
    overrides.pop("config_file", None)
    return overrides


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface of the exporter.

    Raises:
        SystemExit: With code 1 on configuration errors, bind failures and
                    fatal jstat parse errors; with code 0 after SIGINT/SIGTERM.
    """
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
    )

    args = build_parser().parse_args(argv)

    try:
        config = build_config(args.config_file, _overrides(args))
    except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    logging.getLogger().setLevel(config.log_level)

    for tool in (config.jstat_path, config.jps_path):
        if not check_tool_installed(tool):
            logger.warning(f"'{tool}' was not found; sampling will keep retrying until it is available")

    runner = ExporterRunner(config)
    logger.info(f"Starting Server: {config.listen_address}")
    try:
        runner.setup_signal_handlers()
        exit_code = runner.run()
    except OSError as e:
        handle_cli_error(error=e, context="starting HTTP server", exit_code=1, logger=logger)
    finally:
        runner.cleanup_signal_handlers()

    sys.exit(exit_code)


if __name__ == "__main__":
    main_cli()
