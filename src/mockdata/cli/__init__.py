"""Command line interface for the mock data service."""
