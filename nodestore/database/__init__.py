"""PostgreSQL connection management, pooling and table setup for the node store."""
