"""datebook - a personal dated task tracker."""

__version__ = "0.4.0"
