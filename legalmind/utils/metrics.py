"""Prometheus metrics for ingestion and generation."""

from prometheus_client import Counter, Histogram

# Ingestion metrics
ingest_total = Counter(
    "ingest_total",
    "Total evidence ingestion attempts",
    ["outcome"],
)

# Generation metrics
generation_latency_ms = Histogram(
    "generation_latency_ms",
    "Generation latency in milliseconds",
    ["source", "outcome"],
    buckets=[10, 50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000],
)

fallback_total = Counter(
    "fallback_total",
    "Total responses produced by the offline fallback",
    ["reason"],
)


class PrometheusMemoryMetrics:
    """Prometheus-based metrics implementation."""

    def inc_ingest(self, outcome: str) -> None:
        """Increment ingestion counter (accepted or duplicate)."""
        ingest_total.labels(outcome=outcome).inc()

    def record_generation(self, source: str, outcome: str, latency_ms: float) -> None:
        """Record generation latency."""
        generation_latency_ms.labels(source=source, outcome=outcome).observe(latency_ms)

    def inc_fallback(self, reason: str) -> None:
        """Increment fallback counter."""
        fallback_total.labels(reason=reason).inc()


metrics = PrometheusMemoryMetrics()
