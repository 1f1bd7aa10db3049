"""Engage: client-side engine for threaded comments and reactions."""
