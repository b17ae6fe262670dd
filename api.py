from __future__ import annotations

import os
from typing import Dict, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from require_default.analyzer import Analyzer
from require_default.constants import DEFAULT_IGNORE
from require_default.errors import ParseError, UnresolvableSpecifierError, ValidationError
from require_default.fs_scan import DirectorySeed, EntrySeed
from require_default.model import AnalysisReport, Options


app = FastAPI(title="Require Default Analyzer")


class AnalyzeRequest(BaseModel):
	root: str
	entries: List[str] = []
	alias: Dict[str, str] = {}
	ignore: str = DEFAULT_IGNORE


@app.post("/analyze", response_model=AnalysisReport)
def analyze(req: AnalyzeRequest) -> AnalysisReport:
	options = Options(root=os.path.abspath(req.root), alias=req.alias, ignore=req.ignore)
	seed = EntrySeed(req.entries) if req.entries else DirectorySeed()
	try:
		return Analyzer(options).execute(seed)
	except ValidationError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except (ParseError, UnresolvableSpecifierError) as e:
		raise HTTPException(status_code=422, detail=str(e))


def create_app() -> FastAPI:
	return app
