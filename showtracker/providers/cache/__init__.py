"""Cache providers.

JsonFileCacheProvider keeps one namespace's table in memory and mirrors it
to a JSON file after every insert.  The table is not shared across
processes, so run a single worker per cache directory.
"""

from showtracker.providers.cache.json_file_cache import (
    JsonFileCacheProvider,
    load_table,
    save_table,
)

__all__ = ["JsonFileCacheProvider", "load_table", "save_table"]
