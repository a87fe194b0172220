"""
API package for the org chart application.

HTTP surface over the node store: public reads of the node list and the
assembled tree, admin-gated writes, and the admin session endpoints.
"""

__version__ = "1.0.0"

# Don't import anything during package initialization; the Windows event loop
# policy in api.main must be set before psycopg is imported.
# Individual modules will import what they need when they need it.

__all__ = []
