"""Mock study API for local development and loader integration tests.

Run with: uvicorn src.api.app:app --port 5000
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.common.paths import ProjectPaths

logger = logging.getLogger("study_dashboard")

EXPIRED_TOKEN = "expired"

app = FastAPI(title="Study Mock API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8501",
        "http://127.0.0.1:8501",
    ],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["Authorization", "Content-Type"],
)


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _mock_data_path() -> Path:
    env_path = os.environ.get("STUDY_MOCK_DATA_PATH", "").strip()
    if env_path:
        return Path(env_path).resolve()
    return ProjectPaths(_repo_root()).configs / "mock_data.yaml"


def _load_mock_data() -> dict:
    path = _mock_data_path()
    if not path.exists():
        raise HTTPException(status_code=404, detail=f"{path.name} not found")
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _require_token(authorization: str | None) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="missing bearer token")
    if token == EXPIRED_TOKEN:
        raise HTTPException(status_code=401, detail="token expired")
    return token


@app.exception_handler(HTTPException)
async def _http_error(request: Request, exc: HTTPException) -> JSONResponse:
    logger.warning(f"[mock_api] {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/dashboard-stats")
def get_dashboard_stats(authorization: str | None = Header(default=None)) -> dict:
    _require_token(authorization)
    data = _load_mock_data()
    return {"stats": data.get("stats") or {}}


@app.get("/api/my-notes")
def get_my_notes(authorization: str | None = Header(default=None)) -> dict:
    _require_token(authorization)
    data = _load_mock_data()
    return {"notes": data.get("notes") or []}
