"""Cache key derivation for lookup requests.

Keys are what the two cache tables are indexed by, so the rules here decide
which requests count as "the same":

1. **Search keys** -- the raw query with every ASCII space removed.  Queries
   that differ only in spacing ("Breaking Bad" / "BreakingBad") share a key.
   Case, punctuation and other whitespace (tabs, newlines) are left alone,
   so "breaking bad" and "Breaking Bad!" are separate entries.

2. **Detail keys** -- the decimal string of the show id.

Both functions are pure and total.  An empty query yields the empty key,
which is a valid key like any other.
"""


def search_cache_key(query: str) -> str:
    """Return the cache key for a search query.

    >>> search_cache_key("Breaking Bad")
    'BreakingBad'
    >>> search_cache_key("")
    ''
    """
    return query.replace(" ", "")


def details_cache_key(show_id: int) -> str:
    """Return the cache key for a show-detail lookup."""
    return str(int(show_id))
