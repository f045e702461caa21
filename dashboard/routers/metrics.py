from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from dashboard.dependencies import get_db
from dashboard.schemas import (
    MetricsStatusResponse,
    ProjectListResponse,
    ProjectMetricsResponse,
    RawMetricsRequest,
)
from dashboard.services import MetricsDashboardService
from project_metrics import (
    InvalidSortFieldError,
    ProjectMetricsFilter,
    ProjectNotFoundError,
    score_project,
)

router = APIRouter(prefix="/metrics", tags=["Project Metrics"])


@router.post("/score", response_model=ProjectMetricsResponse)
def score_metrics(body: RawMetricsRequest):
    """
    Score a project from submitted figures. Nothing is stored.
    """
    scored = score_project(body.to_raw())
    data = scored.to_dict()
    data["breakdown"] = scored.breakdown
    return ProjectMetricsResponse(success=True, data=data)


@router.get("/projects/{chain_id}/{contract_address}", response_model=ProjectMetricsResponse)
def get_project_metrics(chain_id: str, contract_address: str, db: Session = Depends(get_db)):
    """
    Stored metrics for a contract; calculated and stored on first request.
    """
    service = MetricsDashboardService(db)
    try:
        scored, source = service.get_project_metrics(contract_address, chain_id)
        data = scored.to_dict()
        data["last_updated"] = service.get_last_updated(contract_address, chain_id)
        return ProjectMetricsResponse(success=True, message=f"Metrics {source}", data=data)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/projects/{chain_id}/{contract_address}/refresh", response_model=ProjectMetricsResponse)
def refresh_project_metrics(chain_id: str, contract_address: str, db: Session = Depends(get_db)):
    """
    Recalculate metrics for a contract from its transactions.
    """
    service = MetricsDashboardService(db)
    try:
        scored = service.refresh_project_metrics(contract_address, chain_id)
        data = scored.to_dict()
        data["last_updated"] = service.get_last_updated(contract_address, chain_id)
        return ProjectMetricsResponse(success=True, message="Metrics refreshed", data=data)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/top", response_model=ProjectListResponse)
def get_top_projects(
    chain_id: Optional[str] = None,
    category: Optional[str] = None,
    min_growth_score: Optional[int] = Query(None, ge=0, le=100),
    max_growth_score: Optional[int] = Query(None, ge=0, le=100),
    min_health_score: Optional[int] = Query(None, ge=0, le=100),
    max_health_score: Optional[int] = Query(None, ge=0, le=100),
    min_risk_score: Optional[int] = Query(None, ge=0, le=100),
    max_risk_score: Optional[int] = Query(None, ge=0, le=100),
    sort_by: str = "growth_score",
    sort_direction: str = Query("desc", pattern="^(asc|desc)$"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    """
    Ranked projects with optional chain, category and score filters.
    """
    filters = ProjectMetricsFilter(
        chain_id=chain_id,
        category=category,
        min_growth_score=min_growth_score,
        max_growth_score=max_growth_score,
        min_health_score=min_health_score,
        max_health_score=max_health_score,
        min_risk_score=min_risk_score,
        max_risk_score=max_risk_score,
        sort_by=sort_by,
        sort_direction=sort_direction,
        limit=limit,
    )
    service = MetricsDashboardService(db)
    try:
        data = service.get_top_projects(filters)
        return ProjectListResponse(success=True, count=len(data), data=data)
    except InvalidSortFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/status", response_model=MetricsStatusResponse)
def get_metrics_status(db: Session = Depends(get_db)):
    """
    Counts, freshness and average scores across stored projects.
    """
    service = MetricsDashboardService(db)
    try:
        return MetricsStatusResponse(success=True, data=service.get_status())
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
