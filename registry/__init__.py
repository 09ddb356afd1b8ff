"""Person and pet record registry backed by SQLite."""
