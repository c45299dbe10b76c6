"""Domain layer for ledgerly application."""
