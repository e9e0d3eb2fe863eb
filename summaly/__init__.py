"""summaly — safe link preview summaries."""

from summaly.config import VERSION, Config
from summaly.errors import (
    FetchError,
    Forbidden,
    HttpStatusError,
    LengthRequired,
    RequestTimeout,
    SizeExceeded,
    StatusError,
    SummalyError,
    SummarizeFailed,
    TypeRejected,
)
from summaly.models import Player, ScrapingOptions, SummalyOptions, Summary
from summaly.plugins.base import SummalyPlugin
from summaly.summarizer import Summarizer, summaly
from summaly.utils.http import FetchRequest, FetchResponse, GuardedFetcher
from summaly.utils.robots import RobotsPolicy

__version__ = VERSION

__all__ = [
    "Config",
    "FetchError",
    "FetchRequest",
    "FetchResponse",
    "Forbidden",
    "GuardedFetcher",
    "HttpStatusError",
    "LengthRequired",
    "Player",
    "RequestTimeout",
    "RobotsPolicy",
    "ScrapingOptions",
    "SizeExceeded",
    "StatusError",
    "SummalyError",
    "SummalyOptions",
    "SummalyPlugin",
    "Summarizer",
    "Summary",
    "SummarizeFailed",
    "TypeRejected",
    "summaly",
]
