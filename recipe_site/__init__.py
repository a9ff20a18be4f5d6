"""Recipe Site - recipe sharing web application."""
