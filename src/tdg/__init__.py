"""TubeDigest — YouTube transcript analysis with a chat model."""

__version__ = "0.3.0"
