from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from core.config import MAX_DATASET_SIZE
from core.dataset_store import dataset_store
from src.finance.finance_data import METRIC_KEYS, FEATURE_NAMES, METRIC_LABELS
from src.pca_core.decomposition import MAX_SEED

router = APIRouter()


@router.get("/dataset")
def get_dataset(
    seed: Optional[int] = Query(default=None, ge=0, lt=MAX_SEED),
    size: Optional[int] = Query(default=None, ge=2),
):
    """Generated finance rows plus the metric metadata the dashboard needs."""
    if size is not None and size > MAX_DATASET_SIZE:
        raise HTTPException(
            status_code=400, detail=f"size must be <= {MAX_DATASET_SIZE}, got {size}"
        )

    df = dataset_store.get(seed=seed, size=size)
    return {
        "seed": dataset_store.default_seed if seed is None else seed,
        "rows": df.to_dict(orient="records"),
        "metric_keys": METRIC_KEYS,
        "feature_names": FEATURE_NAMES,
        "metric_labels": METRIC_LABELS,
    }
