"""Command modules for TaskDeck CLI."""
