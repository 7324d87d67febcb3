"""Java classpath and sourcepath indexer for import completion."""

__version__ = "0.1.0"
