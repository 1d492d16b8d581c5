"""Archive Analyser - relationship report for a Twitter/X archive export."""

__version__ = "0.1.0"
