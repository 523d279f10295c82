"""aurctl - Arch User Repository package manager front end."""

__version__ = "0.3.0"
