"""
Design Oracle Gateway
Bounded, fallible access to an external design-inference collaborator.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Any, Callable, NoReturn, Protocol, Sequence, TypeVar, runtime_checkable

from ..core import get_logger
from ..core.errors import OracleUnavailable
from ..markup.features import Feature
from ..monitoring import metrics_collector
from .models import BuildPlan, UITree

logger = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class DesignOracle(Protocol):
    """External collaborator that proposes trees and build plans."""

    def propose_ui_tree(self, markup: str, features: Sequence[Feature]) -> UITree: ...

    def propose_build_plan(self, tree: UITree, palette_keys: Sequence[str]) -> BuildPlan: ...


class OracleGateway:
    """
    Wraps an optional oracle with a hard timeout.

    Every failure mode (no oracle, timeout, exception, wrong result type,
    empty tree) surfaces as OracleUnavailable so callers have a single
    fallback branch.
    """

    def __init__(self, oracle: DesignOracle | None = None, timeout: float = 10.0) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.oracle = oracle
        self.timeout = timeout

    @property
    def available(self) -> bool:
        return self.oracle is not None

    def propose_ui_tree(self, markup: str, features: Sequence[Feature]) -> UITree:
        if self.oracle is None:
            raise OracleUnavailable("No design oracle configured")
        tree = self._call("propose_ui_tree", self.oracle.propose_ui_tree, markup, list(features))
        if not isinstance(tree, UITree):
            self._fail("propose_ui_tree", "invalid_result", f"expected UITree, got {type(tree).__name__}")
        if not tree.children:
            self._fail("propose_ui_tree", "invalid_result", "oracle proposed an empty tree")
        return tree

    def propose_build_plan(self, tree: UITree, palette_keys: Sequence[str]) -> BuildPlan:
        if self.oracle is None:
            raise OracleUnavailable("No design oracle configured")
        plan = self._call("propose_build_plan", self.oracle.propose_build_plan, tree, list(palette_keys))
        if not isinstance(plan, BuildPlan):
            self._fail("propose_build_plan", "invalid_result", f"expected BuildPlan, got {type(plan).__name__}")
        return plan

    def _call(self, call: str, func: Callable[..., T], *args: Any) -> T:
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="oracle")
        try:
            future = executor.submit(func, *args)
            try:
                result = future.result(timeout=self.timeout)
            except FutureTimeout:
                future.cancel()
                self._fail(call, "timeout", f"oracle call exceeded {self.timeout}s")
            except Exception as e:
                self._fail(call, "error", str(e), cause=e)
        finally:
            # Do not wait on a hung call.
            executor.shutdown(wait=False, cancel_futures=True)

        metrics_collector.record_oracle_call(call, "success")
        logger.info("oracle_call", call=call, status="success")
        return result

    def _fail(self, call: str, status: str, reason: str, cause: Exception | None = None) -> NoReturn:
        metrics_collector.record_oracle_call(call, status)
        logger.warning("oracle_unavailable", call=call, status=status, reason=reason)
        raise OracleUnavailable(f"{call}: {reason}") from cause
