from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from cross_chain import (
    ChainConfig,
    calculate_normalization_factors,
    compare_projects,
    get_chain_info,
    get_supported_chains,
    normalize_metrics,
)
from dashboard.dependencies import get_db
from dashboard.schemas import (
    ChainDetailResponse,
    ChainInfo,
    ChainListResponse,
    CompareRequest,
    ComparisonResponse,
    NormalizedMetricsResponse,
    RawMetricsRequest,
)
from dashboard.services import MetricsDashboardService
from project_metrics import ProjectNotFoundError, score_project

router = APIRouter(prefix="/cross-chain", tags=["Cross-Chain"])


def _chain_info(chain: ChainConfig) -> ChainInfo:
    return ChainInfo(
        **chain.to_dict(),
        normalization_factors=calculate_normalization_factors(chain.chain_id).to_dict(),
    )


@router.get("/chains", response_model=ChainListResponse)
def list_chains():
    """
    Supported chains with their normalization factors.
    """
    return ChainListResponse(
        success=True,
        data=[_chain_info(chain) for chain in get_supported_chains()],
    )


@router.get("/chains/{chain_id}", response_model=ChainDetailResponse)
def get_chain(chain_id: str):
    chain = get_chain_info(chain_id)
    if chain is None:
        raise HTTPException(status_code=404, detail=f"Unsupported chain: {chain_id}")
    return ChainDetailResponse(success=True, data=_chain_info(chain))


@router.post("/normalize", response_model=NormalizedMetricsResponse)
def normalize_project(body: RawMetricsRequest):
    """
    Score submitted figures and normalize them for their chain.
    """
    normalized = normalize_metrics(score_project(body.to_raw()))
    return NormalizedMetricsResponse(success=True, data=normalized.to_dict())


@router.post("/compare", response_model=ComparisonResponse)
def compare_submitted_projects(body: CompareRequest):
    """
    Score, normalize and compare two submitted projects.
    """
    result = compare_projects(
        score_project(body.project_a.to_raw()),
        score_project(body.project_b.to_raw()),
    )
    return ComparisonResponse(success=True, data=result.to_dict())


@router.get("/compare", response_model=ComparisonResponse)
def compare_stored_projects(
    contract_a: str = Query(..., min_length=1),
    chain_a: str = Query(..., min_length=1),
    contract_b: str = Query(..., min_length=1),
    chain_b: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    """
    Compare two projects from their stored metrics.
    """
    service = MetricsDashboardService(db)
    try:
        data = service.compare_stored_projects(contract_a, chain_a, contract_b, chain_b)
        return ComparisonResponse(success=True, data=data)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
