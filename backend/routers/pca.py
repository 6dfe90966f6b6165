from typing import List, Literal, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from core.config import POWER_ITERATIONS
from core.dataset_store import dataset_store
from src.finance.finance_data import METRIC_KEYS, build_matrix
from src.pca_core.base import InvalidInputError
from src.pca_core.decomposition import MAX_SEED
from src.pca_core.pca import reduce
from src.pca_core.projection import explore_projection

router = APIRouter()


# --- Schemas ---
class PCARequest(BaseModel):
    metrics: List[str] = Field(default_factory=list)  # empty -> all metrics
    n_components: int = 2
    seed: Optional[int] = Field(default=None, ge=0, lt=MAX_SEED)
    graceful: bool = True
    method: Literal["auto", "svd", "power"] = "auto"


class ProjectionRequest(BaseModel):
    metrics: List[str]
    angle: float = 0.0
    seed: Optional[int] = Field(default=None, ge=0, lt=MAX_SEED)


# --- Helpers ---
def _selected_matrix(metrics, seed):
    unknown = [m for m in metrics if m not in METRIC_KEYS]
    if unknown:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown metric(s) {unknown}. Valid metrics: {METRIC_KEYS}",
        )
    df = dataset_store.get(seed=seed)
    used = [k for k in METRIC_KEYS if k in metrics] if metrics else list(METRIC_KEYS)
    return df, used, build_matrix(df, used)


def _pct(values):
    return [round(float(v) * 100, 1) for v in values]


def neutral_pca_response(n_components, metrics, companies, reason):
    """Neutral "PCA unavailable" result: zero explained variance, no coordinates."""
    k = max(int(n_components), 0)
    return {
        "available": False,
        "reason": reason,
        "method": None,
        "metrics": metrics,
        "companies": companies,
        "transformed": [],
        "components": [],
        "explained_variance": [0.0] * k,
        "explained_variance_pct": [0.0] * k,
        "total_explained_pct": 0.0,
    }


# --- Endpoints ---
@router.post("/pca")
def run_pca(request: PCARequest):
    """Reduce the selected metrics of the seeded dataset to n_components."""
    df, used, X = _selected_matrix(request.metrics, request.seed)
    companies = df["company"].tolist()

    try:
        result = reduce(
            X, request.n_components, rng=request.seed,
            method=request.method, n_iter=POWER_ITERATIONS,
        )
    except InvalidInputError as e:
        if not request.graceful:
            raise HTTPException(status_code=422, detail=str(e))
        print(f"⚠️  PCA unavailable for {used} (k={request.n_components}): {e}")
        return neutral_pca_response(request.n_components, used, companies, str(e))

    pct = _pct(result.explained_variance)
    payload = result.to_dict()
    payload.update({
        "available": True,
        "reason": None,
        "metrics": used,
        "companies": companies,
        "explained_variance_pct": pct,
        "total_explained_pct": round(float(result.explained_variance.sum()) * 100, 1),
    })
    return payload


@router.post("/projection")
def run_projection(request: ProjectionRequest):
    """1-D projection of two metrics at a given angle, plus the optimal angle."""
    if len(request.metrics) != 2:
        raise HTTPException(
            status_code=400, detail=f"Exactly 2 metrics required, got {len(request.metrics)}"
        )
    # keep the user's axis order here: x = first pick, y = second pick
    unknown = [m for m in request.metrics if m not in METRIC_KEYS]
    if unknown:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown metric(s) {unknown}. Valid metrics: {METRIC_KEYS}",
        )
    df = dataset_store.get(seed=request.seed)
    X = df[request.metrics].to_numpy(dtype=float)

    try:
        out = explore_projection(X, request.angle, rng=request.seed)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

    out["metrics"] = list(request.metrics)
    out["points"] = X.tolist()
    out["companies"] = df["company"].tolist()
    return out
