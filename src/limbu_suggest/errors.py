from __future__ import annotations


class MalformedRecord(ValueError):
    """A single dictionary record that cannot be indexed (e.g. no Limbu form)."""


class BuildFailure(RuntimeError):
    """The whole dictionary payload could not be fetched or decoded."""
