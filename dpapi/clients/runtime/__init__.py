"""Runtime components: batching engine and REST transport."""
