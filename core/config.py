"""
Engine configuration and logging setup.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, FrozenSet
import logging
import os


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEFAULT_POPULAR_ROUTES = frozenset({"JFK-LAX", "ORD-SFO", "ATL-MIA"})
DEFAULT_HIGH_SEASON_MONTHS = (5, 6, 7, 8)  # May through August


@dataclass
class PricingConfig:
    """Configuration for the pricing and optimization engines."""

    # Randomness
    random_seed: Optional[int] = None

    # Market conditions
    popular_routes: FrozenSet[str] = field(default_factory=lambda: DEFAULT_POPULAR_ROUTES)
    high_season_months: Tuple[int, ...] = DEFAULT_HIGH_SEASON_MONTHS
    high_season_multiplier: float = 1.1
    low_season_multiplier: float = 0.95

    # Price updates
    price_validity_minutes: int = 30
    history_retention: Optional[int] = None  # Max entries per flight, None = unbounded

    # Deals
    best_deal_min_discount: int = 15
    community_deal_min_discount: int = 20
    deals_limit: int = 10

    # What-if simulation
    operating_cost_per_flight: float = 25000.0

    # Performance
    enable_parallel: bool = False
    num_workers: int = 4
    progress_bar: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    export_log: bool = False

    # Output
    output_dir: str = "pricing_results"

    @classmethod
    def from_env(cls, prefix: str = "PRICING_") -> "PricingConfig":
        """
        Build a config from environment variables.

        Recognised variables (with the default prefix):
        PRICING_RANDOM_SEED, PRICING_LOG_LEVEL, PRICING_LOG_FILE,
        PRICING_ENABLE_PARALLEL, PRICING_NUM_WORKERS, PRICING_HISTORY_RETENTION,
        PRICING_OUTPUT_DIR
        """
        config = cls()
        env = os.environ

        seed = env.get(f"{prefix}RANDOM_SEED")
        if seed:
            config.random_seed = int(seed)
        retention = env.get(f"{prefix}HISTORY_RETENTION")
        if retention:
            config.history_retention = int(retention)
        workers = env.get(f"{prefix}NUM_WORKERS")
        if workers:
            config.num_workers = int(workers)

        parallel = env.get(f"{prefix}ENABLE_PARALLEL")
        if parallel:
            config.enable_parallel = parallel.strip().lower() in ("1", "true", "yes", "on")

        config.log_level = env.get(f"{prefix}LOG_LEVEL", config.log_level)
        config.log_file = env.get(f"{prefix}LOG_FILE", config.log_file)
        config.output_dir = env.get(f"{prefix}OUTPUT_DIR", config.output_dir)
        return config


def setup_logging(config: PricingConfig) -> logging.Logger:
    """
    Configure the root logger for the engines.

    Adds a console handler and, when requested, a file handler in the
    output directory. Returns the engine logger.
    """
    level = getattr(logging, config.log_level.upper())
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers on root logger
    root_logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logger = logging.getLogger('PricingEngine')

    if config.export_log or config.log_file:
        if not config.log_file:
            log_dir = Path(config.output_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            config.log_file = str(log_dir / f"pricing_{timestamp}.log")

        file_handler = logging.FileHandler(config.log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.info(f"Logging to file: {config.log_file}")

    return logger
