"""MyGram Core: photo sharing backend with JWT authentication and ownership checks."""

__version__ = "0.1.0"
