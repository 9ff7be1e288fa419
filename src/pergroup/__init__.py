"""Select the first, least, or top-N row per group, four ways."""

__version__ = "0.1.0"
