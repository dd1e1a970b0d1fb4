"""Summarization flows: acquisition, completion, formatting, persistence."""
