"""Node store for the org chart application.

Persistence layer holding the flat collection of org chart nodes. It is the
only code that talks to the database; the API reaches it through
``api.services.node_service.NodeService``.

This package is organized into the following modules:
- config: Configuration constants and environment handling
- globals: Global state (singleton store, cached connection string)
- records: The NodeRecord type shared by every backend
- database: PostgreSQL connection management and table setup
- stores: NodeStore interface plus PostgreSQL and SQLite backends
- factory: Store lifecycle (initialize, lazy access, cleanup)
"""
