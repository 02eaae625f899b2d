import pytest

from mw_sitemap_server.core.exceptions import TitleResolutionError
from mw_sitemap_server.sitemap import MediaWikiTitleResolver, PageRecord


def record(title, namespace=0):
    return PageRecord(page_id=1, namespace=namespace, title=title)


def test_main_namespace_has_no_prefix(resolver):
    assert resolver.resolve(record("Main_Page")) == "https://wiki.example.org/wiki/Main_Page"


def test_canonical_namespace_prefix(resolver):
    assert resolver.resolve(record("Physics", 14)) == "https://wiki.example.org/wiki/Category:Physics"
    assert resolver.resolve(record("Sandbox", 3)) == "https://wiki.example.org/wiki/User_talk:Sandbox"


def test_spaces_become_underscores(resolver):
    assert resolver.resolve(record("Hello world")) == "https://wiki.example.org/wiki/Hello_world"


def test_url_encoding_matches_mediawiki(resolver):
    url = resolver.resolve(record("AT&T_(company)/History:2000?"))
    assert url == "https://wiki.example.org/wiki/AT%26T_(company)/History:2000%3F"


def test_unicode_titles_are_utf8_encoded(resolver):
    assert resolver.resolve(record("Zürich")) == "https://wiki.example.org/wiki/Z%C3%BCrich"


@pytest.mark.parametrize(
    "title",
    ["", "   ", "A#B", "A<B>", "[[Link]]", "Pipe|Name", "{{Template}}", "Already%20encoded", "x" * 256],
)
def test_invalid_titles_raise(resolver, title):
    with pytest.raises(TitleResolutionError):
        resolver.resolve(record(title))


def test_unknown_namespace_raises(resolver):
    with pytest.raises(TitleResolutionError):
        resolver.resolve(record("Anything", 3000))


def test_configured_namespace_names():
    resolver = MediaWikiTitleResolver(
        server="https://wiki.example.org/",
        article_path="/index.php?title=$1",
        namespace_names={4: "Example Wiki", 3000: "Recipe"},
    )

    assert resolver.resolve(record("About", 4)) == (
        "https://wiki.example.org/index.php?title=Example_Wiki:About"
    )
    assert resolver.resolve(record("Soup", 3000)) == (
        "https://wiki.example.org/index.php?title=Recipe:Soup"
    )


def test_article_path_requires_placeholder():
    with pytest.raises(ValueError):
        MediaWikiTitleResolver(server="https://wiki.example.org", article_path="/wiki/")
