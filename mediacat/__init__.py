"""Media catalog: music folder registry, user folder grants and subtree reassignment."""

__version__ = "1.0.0"
