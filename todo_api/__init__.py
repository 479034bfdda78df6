"""Todo API: todos with labels over a relational or in-memory store."""
