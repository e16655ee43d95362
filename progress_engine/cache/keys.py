"""Cache key fingerprints and per-use-case TTLs.

Keys are deterministic strings built from request parameters, so two
requests with the same inputs share a cache entry.
"""

from collections.abc import Iterable
from datetime import date

# TTLs in seconds
QUOTE_TTL_SECONDS = 5 * 60
MARKET_OVERVIEW_TTL_SECONDS = 10 * 60
MARKET_NEWS_TTL_SECONDS = 15 * 60
ANALYSIS_TTL_SECONDS = 30 * 60
PORTFOLIO_ANALYSIS_TTL_SECONDS = 60 * 60
INVESTMENT_IDEAS_TTL_SECONDS = 2 * 60 * 60
NUTRITION_TIPS_TTL_SECONDS = 4 * 60 * 60
DAILY_SUGGESTIONS_TTL_SECONDS = 6 * 60 * 60

MARKET_OVERVIEW_KEY = "market_overview"


def quote_key(symbol: str) -> str:
    return f"quote_{symbol.upper()}"


def analysis_key(symbol: str, analysis_type: str) -> str:
    return f"analysis_{symbol.upper()}_{analysis_type}"


def portfolio_analysis_key(portfolio_id: str) -> str:
    return f"portfolio_analysis_{portfolio_id}"


def market_news_key(symbols: Iterable[str]) -> str:
    """Key for a news request; symbol order does not matter."""
    return "market_news_" + ",".join(sorted(s.upper() for s in symbols))


def investment_ideas_key(risk_tolerance: str) -> str:
    return f"investment_ideas_{risk_tolerance}"


def daily_suggestions_key(user_id: str, day: date) -> str:
    return f"daily_suggestions_{user_id}_{day.isoformat()}"


def nutrition_tips_key(user_id: str) -> str:
    return f"nutrition_tips_{user_id}"
