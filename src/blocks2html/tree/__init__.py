"""Block content to content tree conversion."""
