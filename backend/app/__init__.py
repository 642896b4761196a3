"""Profile service HTTP application."""
