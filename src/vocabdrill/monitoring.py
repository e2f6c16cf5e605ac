"""Monitoring configuration for the trainer."""
from prometheus_client import Counter, Gauge, start_http_server

# Learning metrics
answers_total = Counter(
    "vocabdrill_answers_total",
    "Total number of answered cards",
    ["result"],
)

words_mastered = Gauge(
    "vocabdrill_words_mastered",
    "Number of words currently mastered",
)

# Word management metrics
words_added = Counter(
    "vocabdrill_words_added_total",
    "Total number of words added to the registry",
)

# Error metrics
error_count = Counter(
    "vocabdrill_errors_total",
    "Total number of errors encountered",
    ["error_type"],
)

# Store metrics
store_operations = Counter(
    "vocabdrill_store_operations_total",
    "Total number of word store operations",
    ["operation"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
