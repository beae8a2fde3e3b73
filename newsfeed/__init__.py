"""newsfeed: a personal RSS aggregator with a stock ticker side panel."""

__version__ = "0.1.0"
