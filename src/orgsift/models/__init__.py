"""Pydantic data models for orgsift."""
