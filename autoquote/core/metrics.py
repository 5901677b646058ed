"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry
import time
from functools import wraps
from typing import Callable

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

store_operations = Counter(
    'store_operations_total',
    'Total quote store operations',
    ['operation', 'status'],
    registry=registry
)

store_operation_duration = Histogram(
    'store_operation_duration_seconds',
    'Quote store operation duration in seconds',
    ['operation'],
    registry=registry
)

saved_quotes = Gauge(
    'saved_quotes',
    'Number of quotes in the quote document after the last store operation',
    registry=registry
)

cache_hits = Counter(
    'cache_hits_total',
    'Total cache hits',
    ['cache'],
    registry=registry
)

cache_misses = Counter(
    'cache_misses_total',
    'Total cache misses',
    ['cache'],
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)


def track_store_operation(operation: str):
    """Decorator to track quote store operation metrics"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = await func(*args, **kwargs)
                store_operations.labels(operation=operation, status='success').inc()
                return result
            except Exception:
                store_operations.labels(operation=operation, status='error').inc()
                raise
            finally:
                store_operation_duration.labels(operation=operation).observe(time.time() - start_time)
        return wrapper
    return decorator


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    from prometheus_client import generate_latest
    return generate_latest(registry).decode('utf-8')
