"""Boundary adapters: AWS clients and the database."""
