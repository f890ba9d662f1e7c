"""Boundary adapters: session database and model inference."""
