"""Federated search and relevance ranking service for ESG reporting data."""
