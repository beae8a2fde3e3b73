"""Market quote providers for the ticker side panel."""

from newsfeed.providers.quotes.yahoo_finance_provider import YahooFinanceQuoteProvider

__all__ = ["YahooFinanceQuoteProvider"]
