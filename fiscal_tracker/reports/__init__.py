"""Timeline and calendar reports."""
