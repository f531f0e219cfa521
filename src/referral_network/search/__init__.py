from .spotlight import SearchResult, search_text, spotlight_search

__all__ = ["SearchResult", "search_text", "spotlight_search"]
