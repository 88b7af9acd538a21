"""App configuration."""

from functools import partial

from pydantic import BaseModel, Field

from ..search.registry import SearchProviderRegistry
from ..search_providers.cell_search import CellDocumentSearchProvider
from ..search_providers.text.matching import FRAGMENT_WIDTH
from ..search_providers.text_search import TextDocumentSearchProvider


class AppConfig(BaseModel):
    """User settings, persisted as JSON in the app data directory."""

    case_sensitive: bool = Field(default=False, description="Initial case-sensitivity of new searches.")
    use_regex: bool = Field(default=False, description="Initial regex mode of new searches.")
    debounce_delay: float = Field(default=0.1, ge=0, description="Seconds to wait after typing before searching.")
    fragment_width: int = Field(default=FRAGMENT_WIDTH, ge=0, description="Context characters kept around a match.")
    log_level: str = Field(default="WARNING", description="Level of the log file.")


def build_registry(config: AppConfig) -> SearchProviderRegistry:
    """Registry with the built-in providers, most specific first."""
    registry = SearchProviderRegistry()
    registry.register(
        CellDocumentSearchProvider, partial(CellDocumentSearchProvider, fragment_width=config.fragment_width)
    )
    registry.register(
        TextDocumentSearchProvider, partial(TextDocumentSearchProvider, fragment_width=config.fragment_width)
    )
    return registry
