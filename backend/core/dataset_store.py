import os
import sys
import threading
from collections import OrderedDict

# Add project root to sys.path so the src packages import when run from backend/
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, "../../"))
if project_root not in sys.path:
    sys.path.append(project_root)

from src.finance.finance_data import generate_finance_data  # noqa: E402
from core.config import DATASET_SIZE, DEFAULT_SEED, DATASET_CACHE_SIZE  # noqa: E402


class DatasetStore:
    """
    Generated finance datasets, one per (seed, size).

    A dataset is generated on first request and never changed afterwards,
    so every PCA request on the same seed sees the same companies. At most
    `max_entries` datasets are kept; the least recently used one is dropped
    (and regenerated identically if asked for again).
    """

    def __init__(self, default_size: int = DATASET_SIZE, default_seed: int = DEFAULT_SEED,
                 max_entries: int = DATASET_CACHE_SIZE):
        self.default_size = int(default_size)
        self.default_seed = int(default_seed)
        self.max_entries = max(1, int(max_entries))
        self._cache = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._cache)

    def __contains__(self, key):
        return key in self._cache

    def get(self, seed=None, size=None):
        seed = self.default_seed if seed is None else int(seed)
        size = self.default_size if size is None else int(size)
        key = (seed, size)

        with self._lock:
            df = self._cache.get(key)
            if df is None:
                df = generate_finance_data(n_companies=size, rng=seed)
                self._cache[key] = df
                print(f"   🆕 Generated finance dataset (seed={seed}, companies={size})")
                while len(self._cache) > self.max_entries:
                    self._cache.popitem(last=False)
            else:
                self._cache.move_to_end(key)
        return df.copy()

    def clear(self):
        with self._lock:
            self._cache.clear()


# Create global instance
dataset_store = DatasetStore()
