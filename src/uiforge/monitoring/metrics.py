"""
Metrics Collection
Prometheus metrics for generation, patching and oracle calls
"""

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the pipeline.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()

        # Generation metrics
        self.generate_requests_total = Counter(
            "uiforge_generate_requests_total",
            "Total number of generate requests",
            ["status"],
            registry=self.registry,
        )
        self.generate_duration = Histogram(
            "uiforge_generate_duration_seconds",
            "Generate request duration in seconds",
            buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
            registry=self.registry,
        )

        # Patch metrics
        self.patch_requests_total = Counter(
            "uiforge_patch_requests_total",
            "Total number of patch requests",
            ["status"],
            registry=self.registry,
        )
        self.patch_ops_total = Counter(
            "uiforge_patch_ops_total",
            "Total number of patch operations",
            ["op", "status"],
            registry=self.registry,
        )

        # Oracle metrics
        self.oracle_calls_total = Counter(
            "uiforge_oracle_calls_total",
            "Total number of design oracle calls",
            ["call", "status"],
            registry=self.registry,
        )

        # Palette resolution
        self.unresolved_keys_total = Counter(
            "uiforge_unresolved_keys_total",
            "Component keys missing from the palette",
            registry=self.registry,
        )

    def record_generate(self, status: str, duration: float) -> None:
        """Record a generate request."""
        self.generate_requests_total.labels(status=status).inc()
        self.generate_duration.observe(duration)

    def record_patch(self, status: str) -> None:
        """Record a patch request."""
        self.patch_requests_total.labels(status=status).inc()

    def record_patch_op(self, op: str, status: str) -> None:
        self.patch_ops_total.labels(op=op, status=status).inc()

    def record_oracle_call(self, call: str, status: str) -> None:
        self.oracle_calls_total.labels(call=call, status=status).inc()

    def record_unresolved_key(self) -> None:
        self.unresolved_keys_total.inc()

    def export(self) -> bytes:
        """Export metrics in Prometheus text format."""
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
