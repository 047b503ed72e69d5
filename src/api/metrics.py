from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        # Try to create it
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "spark_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "spark_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

SUGGESTIONS_TOTAL = get_or_create_metric(
    "spark_suggestions_total",
    "Suggestion responses by origin (model or fallback)",
    Counter,
    labelnames=["source"],
)

LLM_CALLS_TOTAL = get_or_create_metric(
    "spark_llm_calls_total",
    "Remote model calls",
    Counter,
    labelnames=["provider", "outcome"],
)
