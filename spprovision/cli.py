from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from spprovision.client import connect
from spprovision.config import load_settings
from spprovision.handlers.lists import ListsHandler
from spprovision.schema import load_list_definitions


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spprovision",
        description="Provision SharePoint lists, fields and views from a JSON template.",
    )
    parser.add_argument(
        "config",
        type=Path,
        help="Path to the JSON file describing the lists.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Read connection settings from this .env file.",
    )
    parser.add_argument(
        "--site-url",
        default=None,
        help="Target site URL (overrides sp_site_url).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        definitions = load_list_definitions(args.config)
        settings = load_settings(args.env_file, site_url=args.site_url)
        ctx = connect(settings)
        ListsHandler().provision_objects(ctx.web, definitions)
        return 0
    except Exception as exc:
        print(f"spprovision: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
