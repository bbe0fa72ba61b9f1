"""
app/connectors package marker.
"""

from app.connectors.base import BaseConnector, ConnectorRequestError
from app.connectors.marketo_auth import MarketoTokenProvider
from app.connectors.marketo_bulk import MarketoBulkClient
from app.connectors.marketo_rest import MarketoRestClient

__all__ = [
    "BaseConnector",
    "ConnectorRequestError",
    "MarketoBulkClient",
    "MarketoRestClient",
    "MarketoTokenProvider",
]
