"""Shared helpers: roles and credential handling."""
