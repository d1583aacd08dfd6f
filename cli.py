from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from cratemap.config import get_settings
from cratemap.errors import CrateMapError
from cratemap.pipeline import run_pass, watch

logger = logging.getLogger("cratemap")


def setup_logging(silent: bool = False) -> None:
	logging.basicConfig(
		format="%(levelname)s %(name)s: %(message)s",
		level=logging.WARNING if silent else logging.INFO,
	)
	logging.getLogger("watchdog").setLevel(logging.WARNING)


def cmd_render(args: argparse.Namespace) -> None:
	try:
		settings = get_settings(
			input_path=args.input,
			output_path=args.output,
			watch=args.watch,
			recursive=args.recursive,
			primitives=args.primitives,
			silent=args.silent,
		)
	except ValidationError as e:
		setup_logging()
		logger.error("Invalid settings: %s", e)
		sys.exit(1)

	setup_logging(settings.silent)
	try:
		run_pass(settings)
	except CrateMapError as e:
		logger.error("%s", e)
		if not settings.watch:
			sys.exit(1)
	if settings.watch:
		try:
			watch(settings)
		except KeyboardInterrupt:
			logger.info("Stopped")


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def main(argv: Optional[List[str]] = None) -> None:
	parser = argparse.ArgumentParser(prog="cratemap")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pr = sub.add_parser("render", help="Render a crate into markdown notes")
	pr.add_argument("-i", "--input", help="Crate root, source directory or .rs file")
	pr.add_argument("-o", "--output", help="Folder the cratemap_generated notes folder is written to")
	pr.add_argument("-w", "--watch", action="store_true", default=None, help="Re-render when a .rs file changes")
	pr.add_argument("-p", "--primitives", action="store_true", default=None, help="Link primitive types too")
	pr.add_argument("-s", "--silent", action="store_true", default=None)
	pr.add_argument("--no-recursive", dest="recursive", action="store_false", default=None)
	pr.set_defaults(func=cmd_render)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args(argv)
	args.func(args)


if __name__ == "__main__":
	main()
