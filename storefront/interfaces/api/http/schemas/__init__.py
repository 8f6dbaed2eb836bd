"""Schemas HTTP (DTOs Pydantic) por feature."""
