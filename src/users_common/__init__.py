"""Shared domain code for the user management service."""
