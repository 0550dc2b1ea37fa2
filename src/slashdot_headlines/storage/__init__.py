"""Reader for the cached headline database."""

from .loader import dump_headlines, load_headlines, missing_file_message

__all__ = ["dump_headlines", "load_headlines", "missing_file_message"]
