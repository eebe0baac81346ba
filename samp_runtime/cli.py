"""
Inspect the effective server configuration of a directory: show, env, check, version.
"""

import argparse
import json
import os
import sys

import structlog
import yaml

from samp_runtime import __version__


def _configure_logging() -> None:
    """Send log output to stderr so `show` output on stdout stays parseable."""
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))


def _directory(args: argparse.Namespace) -> str:
    if args.dir is not None:
        return args.dir
    from samp_runtime.config.loader import default_config_dir
    return str(default_config_dir())


def cmd_show(args: argparse.Namespace) -> int:
    """Print the effective config (file + SAMP_* overrides) as JSON or YAML."""
    from samp_runtime.config.errors import ConfigError
    from samp_runtime.config.loader import load_from_directory, load_from_environment
    load = load_from_directory if args.no_env else load_from_environment
    try:
        config = load(_directory(args))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    doc = config.to_document()
    if args.format == "yaml":
        print(yaml.dump(doc, allow_unicode=True, default_flow_style=False, sort_keys=False), end="")
    else:
        print(json.dumps(doc, indent=2))
    return 0


def cmd_env(_: argparse.Namespace) -> int:
    """List each setting's SAMP_* variable, whether it can be overridden, and whether it is set."""
    from samp_runtime.config.environment import SERVER_CONFIG_FIELDS
    for binding in SERVER_CONFIG_FIELDS:
        support = binding.kind.value if binding.overridable else "file only"
        state = "set" if binding.env_var in os.environ else "-"
        print(f"{binding.env_var:<28} {support:<12} {state}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Report required settings that are absent after loading; exit 1 if any."""
    from samp_runtime.config.errors import ConfigError
    from samp_runtime.config.loader import load_from_environment
    try:
        config = load_from_environment(_directory(args))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    missing = config.missing_required()
    if missing:
        print(f"Missing required settings: {', '.join(missing)}", file=sys.stderr)
        return 1
    print("OK")
    return 0


def cmd_version(_: argparse.Namespace) -> int:
    """Print version."""
    print(__version__)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="samp-config",
        description="SA:MP server config: show, env, check, version.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # show
    p_show = sub.add_parser("show", help="Print the effective config (samp.json/samp.yaml + SAMP_* env)")
    p_show.add_argument("--dir", default=None, help="Server directory (default: CONFIG_DIR env or current directory)")
    p_show.add_argument("--format", choices=("json", "yaml"), default="json", help="Output format (default: json)")
    p_show.add_argument("--no-env", action="store_true", help="Skip SAMP_* environment overrides")
    p_show.set_defaults(func=cmd_show)

    # env
    p_env = sub.add_parser("env", help="List SAMP_* environment variables for each setting")
    p_env.set_defaults(func=cmd_env)

    # check
    p_check = sub.add_parser("check", help="Report absent required settings")
    p_check.add_argument("--dir", default=None, help="Server directory (default: CONFIG_DIR env or current directory)")
    p_check.set_defaults(func=cmd_check)

    # version
    p_version = sub.add_parser("version", help="Print version")
    p_version.set_defaults(func=cmd_version)

    args = parser.parse_args()
    _configure_logging()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
