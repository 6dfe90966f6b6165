import os

# power iteration below this many steps per component is not trusted to converge
MIN_POWER_ITERATIONS = 50


def int_env(name, default, minimum=None):
    """Integer setting from the environment, raised to `minimum` if lower."""
    value = int(os.getenv(name, str(default)))
    if minimum is not None and value < minimum:
        print(f"⚠️  {name}={value} is below {minimum}, using {minimum}")
        value = minimum
    return value


DATASET_SIZE = int_env("PCA_DATASET_SIZE", 25, minimum=2)
DEFAULT_SEED = int_env("PCA_DEFAULT_SEED", 42, minimum=0)
POWER_ITERATIONS = int_env("PCA_POWER_ITERATIONS", 50, minimum=MIN_POWER_ITERATIONS)
CORS_ORIGINS = [o.strip() for o in os.getenv("PCA_CORS_ORIGINS", "*").split(",") if o.strip()]

# largest dataset a single request may ask for
MAX_DATASET_SIZE = int_env("PCA_MAX_DATASET_SIZE", 500, minimum=2)

# generated datasets kept in memory, least recently used evicted first
DATASET_CACHE_SIZE = int_env("PCA_DATASET_CACHE_SIZE", 32, minimum=1)
