"""External service clients."""

from .oracle import HTTPDesignOracle, OracleResponseError

__all__ = ["HTTPDesignOracle", "OracleResponseError"]
