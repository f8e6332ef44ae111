"""Photo shell — browse a remote photo drive like a local folder tree."""

__version__ = "0.1.0"
