#!/usr/bin/env python3
"""redpower - Redfish power control CLI tool.

Command-line interface for querying and changing the power state of a
server through its BMC.
"""

import argparse
import logging
import sys
from http import HTTPStatus
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from redpower.config.config import DEFAULT_TIMEOUT, RunConfig, Target, TrustMode
from redpower.power import (
    ActionStatus,
    PowerController,
    RedfishController,
    create_power_controller,
)
from redpower.redfish.errors import RedfishError
from redpower.remote.base import TransportError
from redpower.version import BuildInfo, get_build_info


# Constants
CONFIG_KEYS = ("host", "user", "password", "insecure", "timeout", "ignore_conflict")

# Configure logging
logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, quiet: bool = False) -> None:
    """Configure logging based on verbosity level.

    Args:
        debug: If True, enable DEBUG level logging
        quiet: If True, only log warnings and errors
    """
    level = logging.INFO
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load connection defaults from a YAML file.

    Args:
        config_path: Path to YAML configuration file, or None

    Returns:
        Configuration dictionary (empty when no path is given)

    Raises:
        ValueError: If the file does not exist or is not a YAML mapping
    """
    if config_path is None:
        return {}

    path = Path(config_path)
    if not path.exists():
        raise ValueError(f"config file not found: {config_path}")

    with path.open() as f:
        try:
            config_dict = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ValueError(f"config file {config_path} is not valid YAML: {exc}") from exc

    if config_dict is None:
        return {}
    if not isinstance(config_dict, dict):
        raise ValueError(f"config file {config_path} must contain a mapping")

    for key in config_dict:
        if key not in CONFIG_KEYS:
            logger.warning(f"Ignoring unknown config key '{key}' in {config_path}")

    logger.debug(f"Loaded config file {config_path}")
    return config_dict


def create_run_config(config_dict: Dict[str, Any], args: argparse.Namespace) -> RunConfig:
    """Create RunConfig from config dict and CLI args.

    Command-line values take precedence over values from the config file.

    Args:
        config_dict: Configuration dictionary from YAML
        args: Parsed command-line arguments

    Returns:
        RunConfig object

    Raises:
        ValueError: If a required setting is missing or invalid
    """
    host = args.host or config_dict.get("host")
    user = args.user or config_dict.get("user")
    password = args.password or config_dict.get("password")

    if not host:
        raise ValueError("missing --host argument")
    if not user:
        raise ValueError("missing --user argument")
    if not password:
        raise ValueError("missing --pass argument")

    insecure = args.insecure or bool(config_dict.get("insecure", False))
    timeout = args.timeout if args.timeout is not None else config_dict.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ValueError(f"timeout must be a number of seconds, got {timeout!r}")

    target = Target(
        host=str(host),
        user=str(user),
        password=str(password),
        trust_mode=TrustMode.SKIP_VERIFY if insecure else TrustMode.VERIFY,
        timeout=timeout,
    )

    return RunConfig(
        target=target,
        debug=args.debug,
        quiet=args.quiet,
        ignore_conflict=args.ignore or bool(config_dict.get("ignore_conflict", False)),
    )


def report_error(exc: Exception, debug: bool = False) -> None:
    """Print an error, and with debug the offending response, to stderr.

    Args:
        exc: Error to report
        debug: Also print status code and response body when available
    """
    print(f"error: {exc}", file=sys.stderr)

    if not debug or not isinstance(exc, RedfishError):
        return

    if exc.status_code is not None:
        try:
            phrase = HTTPStatus(exc.status_code).phrase
        except ValueError:
            phrase = "unknown"
        print(f"response status code: {exc.status_code} ({phrase})", file=sys.stderr)
    if exc.body is not None:
        print("Response body:", file=sys.stderr)
        print(exc.body.decode("utf-8", errors="replace"), file=sys.stderr)


def cmd_get(controller: PowerController, config: RunConfig) -> int:
    """Print current power state.

    Args:
        controller: Power controller for the target
        config: Run configuration

    Returns:
        Exit code (0 for success)
    """
    state = controller.get_power_state()
    if config.quiet:
        print(state)
    else:
        print(f"host: {config.target.host} power state: {state}")
    return 0


def cmd_list(controller: PowerController, config: RunConfig) -> int:
    """Print power actions supported by the target.

    Args:
        controller: Power controller for the target
        config: Run configuration

    Returns:
        Exit code (0 for success)
    """
    actions = controller.list_actions()
    if not config.quiet:
        print(f"host: {config.target.host} allowed power actions:")
    for action in actions:
        print(action)
    return 0


def cmd_action(controller: RedfishController, config: RunConfig, action: str) -> int:
    """Perform a power action.

    The system is discovered before the action is announced so that a
    discovery failure never follows a "performing" line.

    Args:
        controller: Power controller for the target
        config: Run configuration
        action: Action value to submit

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    system = controller.get_system()

    if not config.quiet:
        print(f"performing {action} action on host {config.target.host} ...")

    outcome = controller.submit_action(system, action, ignore_conflict=config.ignore_conflict)

    if not outcome.ok:
        report_error(outcome.error, config.debug)
        return 1

    if not config.quiet:
        if outcome.status is ActionStatus.APPLIED_IGNORED_CONFLICT:
            print("OK (ignored conflict)")
        else:
            print("OK")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="redpower",
        description="Redfish power control for BMCs",
    )

    parser.add_argument("-c", "--config", help="YAML file with connection defaults")
    parser.add_argument("--host", help="BMC address and optional port (host or host:port)")
    parser.add_argument("--user", help="BMC username")
    parser.add_argument("--pass", "--password", dest="password", help="BMC password")
    parser.add_argument(
        "--insecure", action="store_true", help="Do not verify host certificate"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help=f"Operation timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable printing of http response body"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Do not output any messages except errors"
    )
    parser.add_argument(
        "--ignore",
        action="store_true",
        help="Ignore conflicts (like power on the server which is already on)",
    )
    parser.add_argument(
        "--version", action="store_true", help="Print program version and quit"
    )

    operation = parser.add_mutually_exclusive_group()
    operation.add_argument("--get", action="store_true", help="Get current power state")
    operation.add_argument(
        "--list", action="store_true", help="List supported power actions"
    )
    operation.add_argument("--action", help="Power action to perform")

    return parser


def main(argv: Optional[List[str]] = None, build_info: Optional[BuildInfo] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])
        build_info: Build metadata to report with --version

    Returns:
        Exit code
    """
    argv = sys.argv[1:] if argv is None else argv
    parser = create_parser()

    if not argv:
        parser.print_help(sys.stderr)
        print("error: no arguments provided", file=sys.stderr)
        return 1

    args = parser.parse_args(argv)

    if args.version:
        print(build_info or get_build_info())
        return 0

    if args.debug and args.quiet:
        print("error: arguments --debug and --quiet cannot be used at the same time", file=sys.stderr)
        return 1

    setup_logging(args.debug, args.quiet)

    try:
        config = create_run_config(load_config(args.config), args)
    except ValueError as exc:
        report_error(exc)
        return 1

    if not (args.get or args.list or args.action):
        report_error(ValueError("missing --action, --get or --list argument"))
        return 1

    controller = create_power_controller(config.target)

    # Route to command handlers
    try:
        if args.get:
            return cmd_get(controller, config)
        if args.list:
            return cmd_list(controller, config)
        return cmd_action(controller, config, args.action)

    except (TransportError, RedfishError) as exc:
        report_error(exc, config.debug)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as exc:
        logger.error(f"Fatal error: {exc}", exc_info=True)
        return 1
    finally:
        controller.close()


if __name__ == "__main__":
    sys.exit(main())
