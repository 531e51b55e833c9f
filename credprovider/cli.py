#!/usr/bin/env python3
"""
Command line checker for credential provider configuration.
Loads a file or directory, validates it and reports every problem found.
"""

import argparse
import sys

import yaml

from credprovider.config import SystemConfig, read_credential_provider_config, validate_credential_provider_config
from credprovider.config.system import LogLevel, parse_feature_gates
from credprovider.core.exceptions import ConfigLoadError, ConfigurationError
from credprovider.logger import init_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="credprovider",
        description="Check credential provider configuration files"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Load and validate a config file or directory")
    check.add_argument("path", help="Configuration file or directory of .yaml/.yml/.json files")
    check.add_argument(
        "--feature-gates",
        help="Comma separated Name=bool pairs, e.g. KubeletServiceAccountTokenForCredentialProviders=true"
    )
    check.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="Log level (defaults to CREDPROVIDER_LOG_LEVEL or INFO)"
    )
    check.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    check.add_argument("--dump", action="store_true", help="Print the merged configuration as YAML")

    return parser


def run_check(args: argparse.Namespace) -> int:
    """Run the ``check`` command and return the process exit code."""
    try:
        system_config = SystemConfig.from_env()
        if args.feature_gates:
            system_config.feature_gates.update(parse_feature_gates(args.feature_gates))
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    if args.log_level:
        system_config.log_level = LogLevel(args.log_level)
    if args.json_logs:
        system_config.json_logs = True

    logger = init_logger(system_config).bind(path=args.path)

    try:
        config = read_credential_provider_config(args.path)
    except ConfigLoadError as e:
        logger.error("Failed to load credential provider config", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    errs = validate_credential_provider_config(config, system_config.sa_token_for_credential_providers)
    if len(errs) > 0:
        logger.error("Credential provider config is invalid", errors=len(errs))
        for err in errs:
            print(err.message, file=sys.stderr)
        return 1

    print(f"{args.path}: {len(config.providers)} provider(s) OK: {', '.join(config.provider_names)}")
    if args.dump:
        print(yaml.safe_dump(config.to_dict(), sort_keys=False), end="")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        return run_check(args)

    parser.error(f"unknown command: {args.command}")


if __name__ == "__main__":
    sys.exit(main())
