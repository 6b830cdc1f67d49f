"""Loading block content from document sources."""
