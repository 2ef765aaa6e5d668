"""Developer tools built on the public cursor contract."""

from .dumper import StructureEntry, dump, dump_to_string, parse_dump

__all__ = [
    "StructureEntry",
    "dump",
    "dump_to_string",
    "parse_dump",
]
