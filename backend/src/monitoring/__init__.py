from src.monitoring.metrics import get_metrics, record_request, record_upstream_fetch, reset_metrics

__all__ = ["get_metrics", "record_request", "record_upstream_fetch", "reset_metrics"]
