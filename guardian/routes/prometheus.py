from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Request, Response
import time

router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP Requests",
    ["method", "endpoint", "http_status"]
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["endpoint"]
)

EXCEPTION_COUNT = Counter(
    "http_exceptions_total",
    "Total exceptions",
    ["endpoint"]
)

# Notification counters (notifier/dispatcher.py) share the default registry
@router.get("/")
def metrics():
    data = generate_latest()
    return Response(data, media_type=CONTENT_TYPE_LATEST)

def _endpoint_label(request: Request) -> str:
    # Use the route template (/obligations/{obligation_id}) so ids don't explode label cardinality
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path

async def metrics_middleware(request: Request, call_next):
    start_time = time.time()

    try:
        response = await call_next(request)
    except Exception:
        EXCEPTION_COUNT.labels(endpoint=_endpoint_label(request)).inc()
        raise

    process_time = time.time() - start_time
    endpoint = _endpoint_label(request)

    REQUEST_LATENCY.labels(endpoint=endpoint).observe(process_time)
    REQUEST_COUNT.labels(
        method=request.method,
        endpoint=endpoint,
        http_status=response.status_code
    ).inc()

    return response
