"""
Command-line adapter: encode one source and print its quoted data URI.

Interface responsibilities:
- Build `LoadOptions` from `BASE64LOAD_*` environment variables, with
  command-line flags taking precedence.
- Run the same handler a stylesheet call would run.
- Print the result exactly as the Sass function returns it (quotes included).

Error handling strategy:
- `Base64LoadError` prints `error: <message>` to stderr and exits with 1.
- Argument errors are reported by `argparse` (exit status 2).

Side effects:
- Loads `.env` at import time via `load_dotenv()`.
- Configures root logging (INFO, or DEBUG with `--verbose`).
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import asyncio
import inspect
import logging
import sys

from base64load.api.loader import create_loader
from base64load.core.errors import Base64LoadError
from base64load.core.options import LoadOptions


def build_parser():
    """Return the argument parser for the `base64load` command."""
    parser = argparse.ArgumentParser(
        prog="base64load",
        description="Encode a file or URL as a quoted data URI",
    )
    parser.add_argument("source", help="Local path or http(s) URL")
    parser.add_argument("--mime", default=None, help="Mimetype to embed (required without --detect/--remote)")
    parser.add_argument("--detect", action="store_true", default=None, help="Detect missing mimetypes")
    parser.add_argument("--remote", action="store_true", default=None, help="Allow loading http(s) URLs")
    parser.add_argument("--cwd", default=None, help="Base directory for relative paths")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def run(argv=None):
    """Execute one encode and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = LoadOptions.from_env(detect=args.detect, remote=args.remote, cwd=args.cwd)
        handler = create_loader(options)

        result = handler.callback(args.source, args.mime)
        if inspect.isawaitable(result):
            result = asyncio.run(result)
    except Base64LoadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(result)
    return 0


def main():
    """Console-script entrypoint."""
    sys.exit(run())


if __name__ == "__main__":
    main()
