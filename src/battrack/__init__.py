"""Battery Life Tracker: sample, record and chart host battery charge."""

__version__ = "0.1.0"
