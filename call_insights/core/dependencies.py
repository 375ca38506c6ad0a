"""
FastAPI dependency injection module for the Sales Call Insights backend.

Provides reusable dependencies for configuration access and the language
model capability. Endpoints declare them with the type aliases below; tests
swap them through ``app.dependency_overrides``.

Key Dependencies Provided:
- get_settings_dependency / SettingsDep: the cached Settings singleton
- get_oracle / OracleDep: the ScoringOracle, or None when no credential is set

Usage:
    @router.post("/compare-datasets")
    async def compare(oracle: OracleDep, settings: SettingsDep):
        ...

    # In tests
    app.dependency_overrides[get_oracle] = lambda: FakeOracle()
"""

from typing import Annotated, Optional

from fastapi import Depends

from call_insights.core.config import Settings, get_settings
from call_insights.services.oracle import ScoringOracle, get_shared_oracle


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so tests can override it:

        app.dependency_overrides[get_settings_dependency] = lambda: mock_settings
    """
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]


# =============================================================================
# Oracle Dependency
# =============================================================================

def get_oracle(settings: SettingsDep) -> Optional[ScoringOracle]:
    """
    Return the language model capability for this request.

    The oracle (and its HTTP client) is shared by all requests with the same
    settings. Returns None when OPENAI_API_KEY is not configured; the handler reports
    that as a configuration error instead of failing at dependency time.
    """
    return get_shared_oracle(settings)


OracleDep = Annotated[Optional[ScoringOracle], Depends(get_oracle)]
