"""Registry sync: push local AS-SET definitions, dump registry objects to RPSL."""

from .run import (
    dump_as_sets,
    find_local_definition,
    load_local_as_set,
    load_local_as_sets,
    sync_as_sets,
)

__all__ = [
    "dump_as_sets",
    "find_local_definition",
    "load_local_as_set",
    "load_local_as_sets",
    "sync_as_sets",
]
