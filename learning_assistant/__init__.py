"""Learning Assistant: summarize pasted text, documents and YouTube videos."""

__version__ = "1.0.0"
