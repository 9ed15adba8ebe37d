"""backlog-digest - Daily Trello backlog report posted to a Discord webhook."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the current version of backlog-digest."""
    return __version__
