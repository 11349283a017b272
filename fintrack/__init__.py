"""fintrack - a local personal-finance record tracker."""

__version__ = "0.1.0"
