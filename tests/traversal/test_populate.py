"""
Tests for the populate traversal.

Focus Areas:
1. String, list and mapping populate shapes
2. Nested filters, sort and fields handed to their own traversal
3. Fragments of dynamic zones and polymorphic relations
4. Wildcard bypass at any depth
"""

import pytest

from schemaguard.exceptions import UnknownModelError
from schemaguard.traversal import PopulateTraversal

from conftest import ARTICLE, AUTHOR


@pytest.fixture
def traversal(registry):
    return PopulateTraversal(registry)


class TestPopulateShapes:
    """Test the accepted populate shapes."""

    @pytest.mark.asyncio
    async def test_wildcard(self, traversal, article_schema, recorder):
        """The wildcard is returned without visiting anything."""
        assert await traversal.traverse([recorder], article_schema, "*") == "*"
        assert recorder.keys == []

    @pytest.mark.asyncio
    async def test_comma_separated(self, traversal, article_schema, recorder):
        """Comma separated relations are each visited."""
        result = await traversal.traverse([recorder], article_schema, "author,categories")
        assert result == "author,categories"
        assert recorder.keys == ["author", "categories"]

    @pytest.mark.asyncio
    async def test_dotted_string(self, traversal, article_schema, recorder):
        """A dotted path populates through the related model."""
        result = await traversal.traverse([recorder], article_schema, "author.articles")
        assert result == "author.articles"
        assert recorder.keys == ["author", "articles"]
        assert recorder.node("articles").schema.uid == AUTHOR
        assert recorder.node("articles").path.attribute == "author.articles"

    @pytest.mark.asyncio
    async def test_list(self, traversal, article_schema, recorder):
        """List elements are walked with their position in the raw path."""
        result = await traversal.traverse([recorder], article_schema, ["author", "seo"])
        assert result == ["author", "seo"]
        assert recorder.node("seo").path.raw == "[1].seo"

    @pytest.mark.asyncio
    async def test_mapping_with_boolean(self, traversal, article_schema, recorder):
        """A populated key set to true is visited and kept."""
        result = await traversal.traverse([recorder], article_schema, {"author": True})
        assert result == {"author": True}
        assert recorder.keys == ["author"]


class TestNestedQueries:
    """Test nested query parameters of a populated key."""

    @pytest.mark.asyncio
    async def test_nested_parameters(self, traversal, article_schema, recorder):
        """Fields, filters, sort and populate are walked against the populated model."""
        populate = {
            "author": {
                "fields": ["name"],
                "filters": {"email": {"$endsWith": "@example.com"}},
                "sort": "name:asc",
                "populate": {"articles": True},
            }
        }
        result = await traversal.traverse([recorder], article_schema, populate)

        assert result == populate
        assert recorder.keys == ["author", "fields", "name", "filters", "email", "sort", "name", "populate", "articles"]
        for node in recorder.nodes[1:]:
            assert node.schema.uid == AUTHOR

    @pytest.mark.asyncio
    async def test_keyword_paths(self, traversal, article_schema, recorder):
        """Keywords extend the raw path only."""
        await traversal.traverse([recorder], article_schema, {"author": {"fields": ["name"]}})

        keyword = recorder.node("fields")
        assert keyword.attribute is None
        assert keyword.path.raw == "author.fields"
        assert keyword.path.attribute == "author"

        name = recorder.node("name")
        assert name.path.raw == "author.fields[0].name"
        assert name.path.attribute == "author.name"

    @pytest.mark.asyncio
    async def test_nested_wildcard(self, traversal, article_schema, recorder):
        """A nested wildcard is not inspected either."""
        result = await traversal.traverse([recorder], article_schema, {"author": {"populate": "*"}})
        assert result == {"author": {"populate": "*"}}
        assert recorder.keys == ["author", "populate"]

    @pytest.mark.asyncio
    async def test_count_keyword(self, traversal, article_schema, recorder):
        """The count keyword is visited but not descended."""
        result = await traversal.traverse([recorder], article_schema, {"categories": {"count": True}})
        assert result == {"categories": {"count": True}}
        assert recorder.keys == ["categories", "count"]

    @pytest.mark.asyncio
    async def test_component(self, traversal, article_schema, recorder):
        """Components are walked against the component model."""
        await traversal.traverse([recorder], article_schema, {"seo": {"fields": ["metaTitle"]}})
        assert recorder.node("metaTitle").schema.uid == "shared.seo"
        assert recorder.node("metaTitle").path.attribute == "seo.metaTitle"


class TestFragments:
    """Test populate fragments of polymorphic attributes."""

    @pytest.mark.asyncio
    async def test_dynamic_zone_fragment(self, traversal, article_schema, recorder):
        """Each fragment is walked against the component it names."""
        populate = {"blocks": {"on": {"shared.quote": {"fields": ["text"]}, "shared.rich-text": True}}}
        result = await traversal.traverse([recorder], article_schema, populate)

        assert result == populate
        assert recorder.keys == ["blocks", "on", "fields", "text"]

        text = recorder.node("text")
        assert text.schema.uid == "shared.quote"
        assert text.path.raw == "blocks.on[shared.quote].fields[0].text"
        assert text.path.attribute == "blocks.text"

    @pytest.mark.asyncio
    async def test_morph_relation_fragment(self, traversal, article_schema, recorder):
        """Polymorphic relations use the same fragment syntax."""
        await traversal.traverse([recorder], article_schema, {"related": {"on": {AUTHOR: {"fields": ["name"]}}}})
        assert recorder.node("name").schema.uid == AUTHOR
        assert recorder.node("name").path.attribute == "related.name"

    @pytest.mark.asyncio
    async def test_fragment_requires_on(self, traversal, article_schema, recorder):
        """Other keys of a dynamic zone populate are not walked."""
        result = await traversal.traverse([recorder], article_schema, {"blocks": {"fields": ["text"]}})
        assert result == {"blocks": {"fields": ["text"]}}
        assert recorder.keys == ["blocks"]

    @pytest.mark.asyncio
    async def test_unknown_fragment_model(self, traversal, article_schema, recorder):
        """A fragment naming an unregistered model is an error."""
        with pytest.raises(UnknownModelError):
            await traversal.traverse([recorder], article_schema, {"blocks": {"on": {"shared.missing": True}}})

    @pytest.mark.asyncio
    async def test_fragment_on_content_type(self, traversal, article_schema, recorder):
        """Fragments may name content types."""
        await traversal.traverse([recorder], article_schema, {"related": {"on": {ARTICLE: {"populate": "author"}}}})
        assert recorder.node("author").path.raw == f"related.on[{ARTICLE}].populate.author"
