"""User Management API."""
