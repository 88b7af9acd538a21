"""Test suite for the search provider registry."""

from functools import partial

from docsearch.documents.text_document import CellDocument, TextDocument
from docsearch.search.registry import SearchProviderRegistry
from docsearch.search.search_provider import SearchProvider
from docsearch.search_providers.cell_search import CellDocumentSearchProvider
from docsearch.search_providers.text_search import TextDocumentSearchProvider
from tests.test_utils import FakeDocument, FakeSearchProvider, OtherDocument, SpecificSearchProvider


class TestSearchProviderRegistry:
    """Test provider resolution."""

    def test_returns_new_instance_of_applicable_provider(self):
        """An applicable provider class is instantiated for each lookup."""
        registry = SearchProviderRegistry([FakeSearchProvider])
        document = FakeDocument("text")

        first = registry.get_provider_for_widget(document)
        second = registry.get_provider_for_widget(document)

        assert isinstance(first, FakeSearchProvider)
        assert isinstance(second, FakeSearchProvider)
        assert first is not second

    def test_returns_none_without_applicable_provider(self):
        """Documents nobody can search resolve to ``None``."""
        registry = SearchProviderRegistry([FakeSearchProvider])
        assert registry.get_provider_for_widget(object()) is None

    def test_empty_registry(self):
        """An empty registry resolves nothing."""
        assert SearchProviderRegistry().get_provider_for_widget(FakeDocument("x")) is None

    def test_first_registered_match_wins(self):
        """Registration order decides between applicable providers."""
        document = OtherDocument("text")

        general_first = SearchProviderRegistry([FakeSearchProvider, SpecificSearchProvider])
        specific_first = SearchProviderRegistry([SpecificSearchProvider, FakeSearchProvider])

        assert type(general_first.get_provider_for_widget(document)) is FakeSearchProvider
        assert type(specific_first.get_provider_for_widget(document)) is SpecificSearchProvider

    def test_specific_provider_falls_through_for_other_documents(self):
        """A specific provider does not shadow the fallback for documents it rejects."""
        registry = SearchProviderRegistry([SpecificSearchProvider, FakeSearchProvider])
        assert type(registry.get_provider_for_widget(FakeDocument("x"))) is FakeSearchProvider

    def test_register_twice_keeps_position(self):
        """Re-registering does not move a provider."""
        registry = SearchProviderRegistry([SpecificSearchProvider, FakeSearchProvider])
        registry.register(SpecificSearchProvider)
        assert registry.providers == [SpecificSearchProvider, FakeSearchProvider]
        assert len(registry) == 2

    def test_unregister(self):
        """Unregistered providers are no longer resolved."""
        registry = SearchProviderRegistry([FakeSearchProvider])
        assert registry.unregister(FakeSearchProvider)
        assert not registry.unregister(FakeSearchProvider)
        assert FakeSearchProvider not in registry
        assert registry.get_provider_for_widget(FakeDocument("x")) is None

    def test_factory_builds_instances(self):
        """A registered factory replaces the plain class call."""
        registry = SearchProviderRegistry()
        registry.register(TextDocumentSearchProvider, partial(TextDocumentSearchProvider, fragment_width=3))

        provider = registry.get_provider_for_widget(TextDocument("abc"))

        assert isinstance(provider, TextDocumentSearchProvider)
        assert provider.fragment_width == 3

    def test_builtin_providers(self, registry: SearchProviderRegistry):
        """The default registry routes each document type to its provider."""
        assert isinstance(registry.get_provider_for_widget(TextDocument("x")), TextDocumentSearchProvider)
        assert isinstance(registry.get_provider_for_widget(CellDocument()), CellDocumentSearchProvider)
        assert registry.get_provider_for_widget("just a string") is None

    def test_providers_satisfy_contract_structurally(self):
        """Providers satisfy the protocol without inheriting from it."""
        for provider in (FakeSearchProvider(), TextDocumentSearchProvider(), CellDocumentSearchProvider()):
            assert isinstance(provider, SearchProvider)
