"""Application layer: chat and session use cases."""
