"""
Core infrastructure package for the Sales Call Insights backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL connectivity via asyncpg
- The error taxonomy shared by services and handlers

FastAPI dependencies live in call_insights.core.dependencies and are imported
from there directly, since they depend on the services layer.

Usage Examples:
    from call_insights.core import get_settings, init_db, close_db

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db()
        yield
        await close_db()
"""

from call_insights.core.config import Settings, get_settings
from call_insights.core.database import init_db, close_db, get_db_pool, init_schema
from call_insights.core.errors import (
    CallInsightsError,
    ConfigurationError,
    UpstreamError,
    FormatError,
    StorageError,
    RecordNotFoundError,
    InsufficientDataError,
    InvalidRequestError,
)

__all__ = [
    # Configuration management
    'Settings',
    'get_settings',
    # Database pool lifecycle
    'init_db',
    'close_db',
    'get_db_pool',
    'init_schema',
    # Errors
    'CallInsightsError',
    'ConfigurationError',
    'UpstreamError',
    'FormatError',
    'StorageError',
    'RecordNotFoundError',
    'InsufficientDataError',
    'InvalidRequestError',
]
