"""
Persistence adapters.

json_storage holds the generic, entity-agnostic JSON collection; file_repository
composes it into the domain operations callers use.
Callers should depend on FileRepository rather than touching the JSON files.
"""
