"""prreport - one aggregated status comment per pull request."""

__version__ = "0.1.0"
