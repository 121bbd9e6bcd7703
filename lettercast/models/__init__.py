"""Pydantic request, response and storage models."""
