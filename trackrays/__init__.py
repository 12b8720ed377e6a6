"""Match GPS line exports against keyword-defined tracks and project them as rays."""

__version__ = "0.1.0"
