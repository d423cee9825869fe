# -*- coding: utf-8 -*-
"""
Surgical journey API

Exposes matching, journey generation, the ECG trace and the department
catalog as JSON for the visualization frontend.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .cases.storage import CaseDataset
from .catalog import catalog_payload, department_options, descriptions_payload
from .config import settings
from .journey import generate_journey
from .logging_config import configure_logging
from .matching import CohortSummary, find_similar_patients
from .models import (
    CohortSummaryResponse,
    JourneyRequest,
    JourneyResponse,
    PatientProfileRequest,
    WaveformResponse,
)
from .simulation.rng import make_rng
from .simulation.waveform import WINDOW_SECONDS, generate_waveform

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Surgical Journey",
    description="Similarity-matched vital sign and outcome simulation for an educational surgical journey.",
    version="1.0.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Loaded once, read-only afterwards.
case_dataset = CaseDataset.from_csv(settings.data_file)


def get_dataset() -> CaseDataset:
    return case_dataset


router = APIRouter(prefix="/api", tags=["Journey"])


@router.get("/health")
def health(dataset: CaseDataset = Depends(get_dataset)) -> dict:
    return {"ok": True, "dataset_records": len(dataset)}


@router.get("/catalog/departments", summary="Department options with dataset statistics")
def list_departments() -> dict:
    return {"departments": catalog_payload(), "descriptions": descriptions_payload()}


@router.get("/catalog/departments/{department}")
def get_department(department: str) -> dict:
    try:
        entry = department_options(department)
    except (KeyError, ValueError):
        raise HTTPException(status_code=404, detail=f"Unknown department: {department}")
    return entry.to_dict()


@router.post("/match", response_model=CohortSummaryResponse, summary="Similar historical cases for a profile")
def match_profile(
    request: PatientProfileRequest,
    dataset: CaseDataset = Depends(get_dataset),
) -> CohortSummaryResponse:
    cohort = find_similar_patients(request.to_profile(), dataset)
    return CohortSummaryResponse.model_validate(CohortSummary.from_cohort(cohort).to_dict())


@router.post("/journey", response_model=JourneyResponse, summary="Generate a complete surgical journey")
def create_journey(
    request: JourneyRequest,
    dataset: CaseDataset = Depends(get_dataset),
) -> JourneyResponse:
    rng = make_rng(request.seed) if request.seed is not None else None
    journey = generate_journey(request.to_profile(), dataset, rng=rng)
    return JourneyResponse.model_validate(journey.to_dict())


@router.get("/waveform", response_model=WaveformResponse, summary="Synthetic ECG trace for a heart rate")
def waveform(
    heart_rate: float = Query(..., gt=0, le=300),
    samples: Optional[int] = Query(None, gt=0, le=5000),
    seed: Optional[int] = None,
) -> WaveformResponse:
    sample_count = samples or settings.waveform_samples
    rng = make_rng(seed) if seed is not None else None
    try:
        points = generate_waveform(heart_rate, sample_count, rng=rng)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return WaveformResponse(
        heart_rate=heart_rate,
        window_sec=WINDOW_SECONDS,
        points=[[t, value] for t, value in points],
    )


app.include_router(router)


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    uvicorn.run("surgical_journey.api:app", host=settings.host, port=settings.port, reload=False)
