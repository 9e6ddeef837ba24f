from prometheus_client import Counter, Histogram

api_request_latency_seconds = Histogram(
    "api_request_latency_seconds",
    "API request latency in seconds",
    ["route", "method", "status"],
)

subscriptions_total = Counter(
    "subscriptions_total",
    "Subscribe requests accepted, by outcome",
    ["outcome"],  # created/updated/unsubscribed
)

alert_emails_total = Counter(
    "alert_emails_total",
    "Daily alert emails processed, by outcome",
    ["outcome"],  # sent/failed
)

upstream_request_latency_seconds = Histogram(
    "upstream_request_latency_seconds",
    "Latency of calls to the geocoding, NWS and mail APIs",
    ["service"],
)

alert_batch_duration_seconds = Histogram(
    "alert_batch_duration_seconds",
    "Wall time of a full daily alert run",
    buckets=(1, 5, 15, 30, 60, 120, 300, 600, 1800),
)
