from __future__ import annotations

"""
FastAPI application for listing ranking.

- POST /rank takes raw listing blocks, returns the best item and the full ranking
- per-request ``debug`` / ``origin`` override the env-driven defaults
- a bad origin is a configuration error and answers 422
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import ValidationError

from .config import HealthResponse, RankRequest, RankResponse, RankSettings
from .mapping import map_result_to_response
from .pipeline_types import RawListing
from .rank import rank_listings


app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _settings_for(req: RankRequest) -> RankSettings:
    overrides = {}
    if req.debug is not None:
        overrides["debug"] = req.debug
    if req.origin is not None:
        overrides["origin"] = req.origin
    return RankSettings(**overrides)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.post("/rank", response_model=RankResponse)
def rank(req: RankRequest) -> RankResponse:
    try:
        settings = _settings_for(req)
    except ValidationError as e:
        logger.warning("Rejected rank request with bad settings: {}", e)
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False)) from e

    listings = [RawListing(content=item.content, url=item.url) for item in req.listings]
    result = rank_listings(listings, settings)
    return map_result_to_response(result)
