"""Pydantic models for tool arguments and backend payloads."""
