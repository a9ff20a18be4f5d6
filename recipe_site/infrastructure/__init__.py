"""Infrastructure layer - database access and identity management."""
