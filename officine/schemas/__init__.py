"""Pydantic schemas for users, inspections, grids, audit entries, KPIs and commands."""
