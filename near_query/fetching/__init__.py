"""Token queries against deployed contracts."""

from .fetcher import TokenFetcher, DEFAULT_PAGE_LIMIT_MAX

__all__ = ["TokenFetcher", "DEFAULT_PAGE_LIMIT_MAX"]
