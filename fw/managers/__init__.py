"""Catalog mutations.

Each module provides functions that edit a loaded ``Config`` in memory and
return it.  Managers raise domain exceptions from ``fw.errors`` and never
touch the filesystem -- persisting the result is the caller's job.
"""
