"""Book catalog API.

This package contains the HTTP service that manages books, authors and
categories, backed either by a relational database or by an in-process store.
"""

__version__ = "0.1.0"
