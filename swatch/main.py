"""CLI entry point — dispatches swatch subcommands."""
import argparse
import logging
import sys


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="swatch",
        description="Classify files into colored categories by name",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    # swatch classify
    p_classify = sub.add_parser("classify", help="Print the category of each filename")
    p_classify.add_argument("names", nargs="+", metavar="NAME", help="Filename or path")
    p_classify.add_argument("--path", dest="as_path", action="store_true",
                            help="Treat NAME as a filesystem path (directories are never categorized)")

    # swatch categories
    p_cats = sub.add_parser("categories", help="List configured categories")
    p_cats.add_argument("--conflicts", action="store_true",
                        help="Also show suffixes declared by more than one category")

    # swatch du
    p_du = sub.add_parser("du", help="Disk usage by category", conflict_handler="resolve")
    p_du.add_argument("path", nargs="?", default=".", help="Path to summarize (default: .)")
    p_du.add_argument("-h", dest="human", action="store_true", help="Human-readable sizes")
    p_du.add_argument("--uncategorized", action="store_true",
                      help="List the suffixes of uncategorized files")

    # swatch reset
    sub.add_parser("reset", help="Replace configured categories with the built-in defaults")

    # swatch server
    p_server = sub.add_parser("server", help="Start the swatch HTTP API")
    p_server.add_argument("--host", default=None, help="Bind address (default: from config)")
    p_server.add_argument("--port", type=int, default=None, help="Port (default: from config)")
    p_server.add_argument("--reload", action="store_true", help="Enable auto-reload (dev only)")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.version:
        from swatch.commands import get_version
        print(f"swatch {get_version()}")
        sys.exit(0)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "classify":
            from swatch.commands.classify import cmd_classify
            cmd_classify(args)
        elif args.command == "categories":
            from swatch.commands.categories import cmd_categories
            cmd_categories(args)
        elif args.command == "du":
            from swatch.commands.du import cmd_du
            cmd_du(args)
        elif args.command == "reset":
            from swatch.commands.categories import cmd_reset
            cmd_reset(args)
        elif args.command == "server":
            from swatch.commands.server import cmd_server
            cmd_server(args)
        else:
            parser.print_help()
            sys.exit(1)
    except KeyboardInterrupt:
        sys.stderr.write("\n")
        sys.exit(130)


if __name__ == "__main__":
    main()
