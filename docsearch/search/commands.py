"""Entry points used by the command layer."""

from typing import Any

from .directory import ActiveSearchDirectory
from .registry import SearchProviderRegistry
from .search_instance import SearchInstance, document_key


def start_search_on(
    document: Any,
    registry: SearchProviderRegistry,
    directory: ActiveSearchDirectory,
    case_sensitive: bool = False,
    use_regex: bool = False,
) -> SearchInstance | None:
    """Open (or refocus) the search session of ``document``.

    Returns ``None`` when no registered provider can search the document.
    """
    document_id = document_key(document)
    instance = directory.lookup(document_id)
    if instance is not None:
        instance.focus_input()
        return instance

    provider = registry.get_provider_for_widget(document)
    if provider is None:
        return None

    instance = SearchInstance(document, provider, case_sensitive=case_sensitive, use_regex=use_regex)
    directory.register(document_id, instance)
    instance.focus_input()
    return instance


async def highlight_next_in(
    document: Any, registry: SearchProviderRegistry, directory: ActiveSearchDirectory
) -> SearchInstance | None:
    """Select the next match, opening a session first if there is none."""
    instance = directory.lookup(document_key(document))
    if instance is None:
        return start_search_on(document, registry, directory)
    await instance.highlight_next()
    return instance


async def highlight_previous_in(
    document: Any, registry: SearchProviderRegistry, directory: ActiveSearchDirectory
) -> SearchInstance | None:
    """Select the previous match, opening a session first if there is none."""
    instance = directory.lookup(document_key(document))
    if instance is None:
        return start_search_on(document, registry, directory)
    await instance.highlight_previous()
    return instance
