"""Design Oracle Client - HTTP adapter for an external design-inference service."""

from typing import Any, Sequence

import httpx
import pybreaker
from pydantic import ValidationError as PydanticValidationError

from ..agents.models import BuildPlan, UITree
from ..core import get_logger
from ..core.json import JSONParseError, extract_json, validate_json_depth
from ..markup.features import Feature
from ..palette import Palette

logger = get_logger(__name__)

MAX_RESPONSE_DEPTH = 32


class OracleResponseError(Exception):
    """The oracle answered with something that is not a valid proposal."""


class BreakerListener(pybreaker.CircuitBreakerListener):
    """Logs circuit breaker state changes."""

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "breaker_state_change",
            breaker=cb.name,
            from_state=str(getattr(old_state, "name", old_state)),
            to_state=str(getattr(new_state, "name", new_state)),
        )


class HTTPDesignOracle:
    """
    Design oracle reached over HTTP, with circuit breaker protection.

    Errors are raised, not swallowed; the oracle gateway turns them into
    a fallback.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        fail_max: int = 5,
        reset_timeout: int = 30,
        client: httpx.Client | None = None,
        palette: Palette | None = None,
    ) -> None:
        """
        Args:
            base_url: Oracle service base URL
            timeout: Per-request timeout in seconds
            fail_max: Consecutive failures before the breaker opens
            reset_timeout: Seconds before an open breaker lets a trial call through
            client: Preconfigured httpx client (tests)
            palette: Catalog described alongside the offered keys in build-plan requests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.palette = palette
        self._client = client or httpx.Client(timeout=timeout)
        self._breaker = pybreaker.CircuitBreaker(
            fail_max=fail_max,
            reset_timeout=reset_timeout,
            name="design-oracle",
            listeners=[BreakerListener()],
        )

        logger.info("client_init", url=self.base_url)

    @property
    def breaker_state(self) -> str:
        return self._breaker.current_state

    def propose_ui_tree(self, markup: str, features: Sequence[Feature]) -> UITree:
        data = self._post(
            "/ui-tree",
            {"markup": markup, "features": [feature.to_dict() for feature in features]},
        )
        payload = data.get("tree", data)
        try:
            return UITree.model_validate(payload)
        except PydanticValidationError as e:
            raise OracleResponseError(f"invalid UI tree: {e.error_count()} errors") from e

    def propose_build_plan(self, tree: UITree, palette_keys: Sequence[str]) -> BuildPlan:
        body: dict[str, Any] = {
            "tree": tree.model_dump(mode="json", exclude_none=True),
            "paletteKeys": list(palette_keys),
        }
        if self.palette is not None:
            body["palette"] = self.palette.describe(palette_keys)
        data = self._post("/build-plan", body)
        payload = data.get("plan", data)
        try:
            return BuildPlan.model_validate(payload)
        except PydanticValidationError as e:
            raise OracleResponseError(f"invalid build plan: {e.error_count()} errors") from e

    def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}{path}"

        def _make_request() -> httpx.Response:
            response = self._client.post(url, json=body)
            response.raise_for_status()
            return response

        response = self._breaker.call(_make_request)

        try:
            data = extract_json(response.text)
            validate_json_depth(data, max_depth=MAX_RESPONSE_DEPTH)
        except JSONParseError as e:
            logger.warning("oracle_bad_response", path=path, error=str(e))
            raise OracleResponseError(str(e)) from e

        logger.debug("oracle_response", path=path, status=response.status_code)
        return data

    def health_check(self) -> bool:
        """
        Check if the oracle is reachable (bypasses circuit breaker).

        Returns:
            True if the service answers /health with 2xx
        """
        try:
            response = self._client.get(f"{self.base_url}/health", timeout=2.0)
            return response.is_success
        except httpx.HTTPError as e:
            logger.warning("health_check_failed", error=str(e))
            return False

    def close(self) -> None:
        self._client.close()
