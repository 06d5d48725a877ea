from __future__ import annotations
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, Dict, List, Optional
import asyncio
import logging
import math

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator

from ..config import Settings, load_settings
from ..log import setup_logging
from ..risk_engine import (
    analysis_for,
    applicant_summaries,
    compute_kpis,
    simulate_for,
)
from ..store import ApplicantNotFoundError, ApplicantStore, Record

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return load_settings()


@lru_cache
def get_store() -> ApplicantStore:
    # 프로세스당 한 번만 읽음 (lifespan에서 미리 로드)
    return ApplicantStore.from_json(get_settings().data_path)


settings = get_settings()
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 시작 시 데이터 파일 로드, 파일 오류는 기동 실패로 드러남
    app.dependency_overrides.get(get_store, get_store)()
    yield


app = FastAPI(title="RISKON Credit Risk API", version="0.2.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/api")


class SimulateRequest(BaseModel):
    id: Optional[str] = None
    income: Optional[float] = None
    loanAmount: Optional[float] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v):
        return None if v is None else str(v)

    @field_validator("income", "loanAmount", mode="before")
    @classmethod
    def loose_number(cls, v):
        # 검증 없이 수용: 숫자로 못 읽으면 "없음" 처리 -> 기본값 적용
        try:
            x = float(v)
        except (TypeError, ValueError):
            return None
        return None if math.isnan(x) else x


class SimulateResponse(BaseModel):
    simulatedProb: float
    riskCategory: str


@app.exception_handler(ApplicantNotFoundError)
async def applicant_not_found(request: Request, exc: ApplicantNotFoundError):
    logger.info("%s %s -> 404 (%s)", request.method, request.url.path, exc.applicant_id)
    return JSONResponse(status_code=404, content={"error": "Applicant not found"})


@router.get("/kpis")
def kpis(store: ApplicantStore = Depends(get_store)) -> Dict[str, Any]:
    return compute_kpis(store)


@router.get("/applicants")
def applicants(store: ApplicantStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return applicant_summaries(store)


@router.get("/applicants/{applicant_id}")
def applicant_detail(
    applicant_id: str, store: ApplicantStore = Depends(get_store)
) -> Record:
    return store.get(applicant_id)


@router.post("/analyze/{applicant_id}")
async def analyze(
    applicant_id: str,
    store: ApplicantStore = Depends(get_store),
    cfg: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    record = store.get(applicant_id)
    # "AI 분석" 연출용 지연, 취소 없음
    await asyncio.sleep(cfg.analyze_delay_seconds)
    return analysis_for(record)


@router.post("/simulate", response_model=SimulateResponse)
def simulate(
    req: Optional[SimulateRequest] = None,
    store: ApplicantStore = Depends(get_store),
) -> Dict[str, Any]:
    req = req or SimulateRequest()
    record = store.get(req.id)
    return simulate_for(record, req.income, req.loanAmount).to_dict()


app.include_router(router)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args()
    logger.info("RISKON backend server running on http://%s:%d", args.host, args.port)
    uvicorn.run("riskon.app.main:app", host=args.host, port=args.port)
