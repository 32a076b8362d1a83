"""EntiToon: entity-tagged TOON encoding of JSON-like records."""

__version__ = "1.0.0"
