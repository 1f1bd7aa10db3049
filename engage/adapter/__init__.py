"""Adapters to the backend API and in-memory stand-ins."""
