"""
Top-level entry point: python -m fn_migrate [command] [options]

Commands:
    migrate  - copy functions from the source gateway to the target (default)
    info     - show both gateways and check the target is compatible
"""

import sys


USAGE = """\
usage: fn-migrate [command] [options]

commands:
  migrate   Create or update every source function on the target gateway (default)
  info      Show source/target gateway details and check target compatibility

Run 'fn-migrate <command> --help' for command-specific options.
"""

COMMANDS = ("migrate", "info")


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("-h", "--help"):
        print(USAGE)
        sys.exit(0)

    command = "migrate"
    if args and not args[0].startswith("-"):
        command = args.pop(0)
        if command not in COMMANDS:
            print(f"Unknown command: {command}\n")
            print(USAGE)
            sys.exit(1)

    from .cli import main as cli_main
    cli_main(args, command=command)


if __name__ == "__main__":
    main()
