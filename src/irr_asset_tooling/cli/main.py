"""Main CLI entry point for irr-asset."""

import sys

from irr_asset_tooling.cli import asset_cmd, registry_cmd
from irr_asset_tooling.cli.parse_common import configure_logging

COMMANDS = {
    "convert": asset_cmd.run_convert_argv,
    "flatten": asset_cmd.run_flatten_argv,
    "sync": registry_cmd.run_sync_argv,
    "dump": registry_cmd.run_dump_argv,
    "list": registry_cmd.run_list_argv,
}


def _usage() -> None:
    print("Usage: irr-asset <command> [args...] [--config <yaml>] [--verbose|--debug]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  convert <file>   - Convert between YAML, RPSL and ARIN XML (--to rpsl|xml|yaml, --flatten)",
        file=sys.stderr,
    )
    print("  flatten <file>   - Print members of a YAML definition (flat members via bgpq4)", file=sys.stderr)
    print("  sync             - Push local sync/as-sets member changes to ARIN", file=sys.stderr)
    print("  dump             - Write every AS-SET of the org as RPSL", file=sys.stderr)
    print("  list             - List AS-SET names of the org", file=sys.stderr)


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        _usage()
        sys.exit(1)

    command = sys.argv[1]
    handler = COMMANDS.get(command)
    if handler is None:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        sys.exit(1)

    try:
        argv = configure_logging(sys.argv[2:])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    handler(argv)


if __name__ == "__main__":
    main()
