"""gog: a Gogs issue-tracker client for coordinating multiple agents."""

__version__ = "0.1.0"
