"""API route handlers for fills."""
