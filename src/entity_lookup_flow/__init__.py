"""Entity lookup step for content-import pipelines."""

__version__ = "1.0.0"
