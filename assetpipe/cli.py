from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .errors import AssetPipeError
from .manager import AssetManager
from .publish import Publisher
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="assetpipe",
        description="Asset pipeline: resolve, bundle and publish front-end assets",
        add_help=True,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Arguments shared by every command
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--root",
            type=Path,
            default=None,
            help="project root containing assetpipe.yaml (default: current directory)",
        )
        env = sp.add_mutually_exclusive_group()
        env.add_argument("--env", default=None, help="environment name (default: $ASSETPIPE_ENV or 'local')")
        env.add_argument("--prod", action="store_true", help="use the production environment")
        sp.add_argument("-v", "--verbose", action="count", default=0, help="-v for progress, -vv for debug output")

    sp_render = sub.add_parser("render", help="Publish an asset and print its HTML tag")
    sp_render.add_argument("logical_path")
    add_common(sp_render)

    sp_body = sub.add_parser("body", help="Print the processed body of an asset")
    sp_body.add_argument("logical_path")
    add_common(sp_body)

    sp_url = sub.add_parser("url", help="Print the published URL of a path (manifest-aware)")
    sp_url.add_argument("path")
    add_common(sp_url)

    sp_publish = sub.add_parser("publish", help="Clean, copy static files and optionally compile (JSON report)")
    sp_publish.add_argument("-c", "--compile", action="store_true", help="precompile top-level stylesheets and scripts")
    add_common(sp_publish)

    sp_manifest = sub.add_parser("manifest", help="Print manifest entries (JSON)")
    add_common(sp_manifest)

    return p


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _manager(ns: argparse.Namespace) -> AssetManager:
    root = ns.root or Path.cwd()
    manager = AssetManager(root, environment=ns.env)
    if ns.prod:
        manager.set_production()
    return manager


def _jdumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _configure_logging(ns.verbose)

    try:
        manager = _manager(ns)

        if ns.cmd == "render":
            sys.stdout.write(manager.render(ns.logical_path).rstrip("\n") + "\n")
            return 0

        if ns.cmd == "body":
            sys.stdout.write(manager.get(ns.logical_path).get_body())
            return 0

        if ns.cmd == "url":
            sys.stdout.write(manager.asset_url(ns.path) + "\n")
            return 0

        if ns.cmd == "publish":
            report = Publisher(manager).run(compile=bool(ns.compile))
            sys.stdout.write(_jdumps(report.to_dict()))
            return 0

        if ns.cmd == "manifest":
            sys.stdout.write(_jdumps(manager.manifest.entries()))
            return 0

    except AssetPipeError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
