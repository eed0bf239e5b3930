"""Daily word-delta tracking.

Counts words in edited documents, keeps a per-day baseline for each document
and aggregates the net words added into one total per day.
"""

from .aggregator import Aggregator, day_total, net_delta
from .clock import DayClock, day_key, parse_day_key
from .history import DayCount, DayHistory, HistorySummary, history_series, summarize
from .ledger import DocumentLedger
from .models import TrackerState, WordCount
from .persistence import StateStore
from .session import TrackingSession
from .tokenizer import count_words

__all__ = [
    "Aggregator",
    "DayClock",
    "DayCount",
    "DayHistory",
    "DocumentLedger",
    "HistorySummary",
    "StateStore",
    "TrackerState",
    "TrackingSession",
    "WordCount",
    "count_words",
    "day_key",
    "day_total",
    "history_series",
    "net_delta",
    "parse_day_key",
    "summarize",
]
