from prometheus_client import Counter, Gauge

# Wrapper metrics
GRAPH_EVENTS_BRIDGED = Counter(
    "graphrx_graph_events_total",
    "Graph events pushed onto broadcast channels",
    ["event"],
)
ATTACHED_LISTENERS = Gauge(
    "graphrx_attached_listeners",
    "Whether the wrapper listener for an event kind is attached",
    ["event"],
)

# Stream metrics
ENTITY_STREAMS_CLOSED = Counter(
    "graphrx_entity_streams_closed_total",
    "Per-entity stream subscriptions that ended",
    ["entity"],
)
