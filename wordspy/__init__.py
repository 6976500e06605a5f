"""wordspy: a team word-guessing game service."""

__version__ = "0.1.0"
