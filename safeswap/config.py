"""Search configuration and logging setup."""

import logging
import os
from dataclasses import dataclass

import structlog


@dataclass(frozen=True)
class SearchConfig:
    """Bounds for the best-trade search.

    Attributes:
        max_hops: Maximum number of pairs in a returned route (default: 3)
        max_num_results: Capacity of the ranked result list (default: 3)
        max_explored_nodes: Total pair evaluations allowed per search call,
            bounding latency on dense graphs (default: 100,000)
    """

    max_hops: int = 3
    max_num_results: int = 3
    max_explored_nodes: int = 100_000

    def __post_init__(self) -> None:
        for name in ("max_hops", "max_num_results", "max_explored_nodes"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Build a config from environment variables with the defaults above.

        - SAFESWAP_MAX_HOPS
        - SAFESWAP_MAX_RESULTS
        - SAFESWAP_MAX_EXPLORED_NODES
        """
        return cls(
            max_hops=int(os.environ.get("SAFESWAP_MAX_HOPS", str(cls.max_hops))),
            max_num_results=int(os.environ.get("SAFESWAP_MAX_RESULTS", str(cls.max_num_results))),
            max_explored_nodes=int(
                os.environ.get("SAFESWAP_MAX_EXPLORED_NODES", str(cls.max_explored_nodes))
            ),
        )


# Default configuration instance
DEFAULT_SEARCH_CONFIG = SearchConfig()


def configure_logging(verbose: bool = False) -> None:
    """Route structlog output to the console.

    The library itself never configures logging; applications call this once.
    """
    log_level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


__all__ = ["SearchConfig", "DEFAULT_SEARCH_CONFIG", "configure_logging"]
