"""Locale negotiation CLI: validate, canonicalize and resolve BCP 47 tags.

Usage:
    python -m intl_locale.cli.negotiate validate TAG [TAG ...]
    python -m intl_locale.cli.negotiate canonicalize TAG [TAG ...]
    python -m intl_locale.cli.negotiate resolve TAG [TAG ...] [--matcher lookup] [--keys ca,nu]
    python -m intl_locale.cli.negotiate supported TAG [TAG ...] [--matcher lookup]
    python -m intl_locale.cli.negotiate prioritize TAG [TAG ...]
    python -m intl_locale.cli.negotiate serve [--port N]
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from intl_locale.config import settings
from intl_locale.data.provider import LocaleDataProvider
from intl_locale.logging import create_logger
from intl_locale.negotiation import (
    prioritize_available_locales,
    resolve_locale,
    supported_locales,
)
from intl_locale.tags import (
    LocaleError,
    TagCanonicalizer,
    canonicalize_locale_list,
    is_structurally_valid,
)

EXIT_INVALID = 2


def _split_keys(raw: str) -> list[str]:
    return [key.strip().lower() for key in raw.split(",") if key.strip()]


def _parse_options(pairs: Sequence[str]) -> dict[str, str]:
    options: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {pair!r}")
        options[key.strip().lower()] = value.strip()
    return options


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="intl-locale", description="Validate, canonicalize and negotiate BCP 47 language tags"
    )
    ap.add_argument("--data-dir", default=settings.data_dir or None, help="Locale data directory")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("validate", help="Report structural validity of each tag")
    p.add_argument("tags", nargs="+")

    p = sub.add_parser("canonicalize", help="Canonicalize and deduplicate a locale list")
    p.add_argument("tags", nargs="+")

    p = sub.add_parser("resolve", help="Resolve the best available locale")
    p.add_argument("tags", nargs="*")
    p.add_argument("--matcher", default=settings.locale_matcher, help="lookup | best fit")
    p.add_argument("--keys", type=_split_keys, default=[], help="Relevant extension keys, e.g. ca,nu")
    p.add_argument("--option", action="append", default=[], help="Key override KEY=VALUE")
    p.add_argument("--default-locale", default=None)

    p = sub.add_parser("supported", help="Requested tags the available locales can serve")
    p.add_argument("tags", nargs="+")
    p.add_argument("--matcher", default=settings.locale_matcher, help="lookup | best fit")

    p = sub.add_parser("prioritize", help="Order available locales by the request list")
    p.add_argument("tags", nargs="+")

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=settings.api_port)

    return ap


def _emit(payload: object) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("intl_locale.api.server:app", host=args.host, port=args.port, reload=False)
        return 0

    if args.command == "validate":
        results = {tag: is_structurally_valid(tag) for tag in args.tags}
        _emit(results)
        return 0 if all(results.values()) else EXIT_INVALID

    slog = create_logger("cli")
    try:
        provider = LocaleDataProvider(args.data_dir)
        canonicalizer = TagCanonicalizer(provider.tables)
        requested = canonicalize_locale_list(args.tags, canonicalizer)

        if args.command == "canonicalize":
            _emit(requested)
        elif args.command == "resolve":
            options = _parse_options(args.option)
            options["localeMatcher"] = args.matcher
            result = resolve_locale(
                provider.available_locales,
                requested,
                options,
                args.keys,
                provider,
                default_locale=args.default_locale or provider.default_locale,
            )
            _emit(result.to_dict())
        elif args.command == "supported":
            _emit(
                supported_locales(
                    provider.available_locales, requested, {"localeMatcher": args.matcher}
                )
            )
        elif args.command == "prioritize":
            _emit(prioritize_available_locales(provider.available_locales, requested))
    except (LocaleError, argparse.ArgumentTypeError) as e:
        slog.error("Command failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID
    finally:
        slog.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
