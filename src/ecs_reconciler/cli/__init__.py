"""Command line interface for the ECS reconciler."""
