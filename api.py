from __future__ import annotations

import os
from pathlib import Path
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from cratemap.config import Settings
from cratemap.errors import CrateMapError
from cratemap.model import Module
from cratemap.pipeline import run_pass
from cratemap.resolver import parse


app = FastAPI(title="cratemap")


class ParseRequest(BaseModel):
	root_path: str
	recursive: bool = True


class RenderRequest(ParseRequest):
	output_path: str
	primitives: bool = False


class RenderResponse(BaseModel):
	notes_dir: str
	notes: List[str]


def _checked_root(root_path: str) -> Path:
	root = os.path.abspath(root_path)
	if not os.path.exists(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	return Path(root)


@app.post("/parse", response_model=Module)
def parse_crate(req: ParseRequest) -> Module:
	root = _checked_root(req.root_path)
	try:
		return parse(root, recursive=req.recursive)
	except CrateMapError as e:
		raise HTTPException(status_code=400, detail=str(e))


@app.post("/render", response_model=RenderResponse)
def render_crate(req: RenderRequest) -> RenderResponse:
	settings = Settings(
		input_path=_checked_root(req.root_path),
		output_path=Path(os.path.abspath(req.output_path)),
		recursive=req.recursive,
		primitives=req.primitives,
	)
	try:
		notes = run_pass(settings)
	except CrateMapError as e:
		raise HTTPException(status_code=400, detail=str(e))
	return RenderResponse(notes_dir=str(settings.notes_dir), notes=notes)


def create_app() -> FastAPI:
	return app
