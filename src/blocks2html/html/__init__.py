"""HTML rendering: escaping, serializers and the HTML builder."""
