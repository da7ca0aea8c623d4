"""Pydantic domain models: tables, fleet statistics, recommendations."""
