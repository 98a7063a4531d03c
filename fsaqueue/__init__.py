"""Block queue, small-file packing, option parsing and thread-state helpers for an archiving pipeline."""

__version__ = "0.1.0"
__all__ = ["items", "queue", "regmulti", "strdico", "strlist", "syncthread"]