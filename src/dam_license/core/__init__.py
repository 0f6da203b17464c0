"""Core building blocks: configuration, database, worlds and contexts."""
