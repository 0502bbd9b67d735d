"""Unit tests for core/compiler.py"""

import pytest

from gardenfm.config import Settings
from gardenfm.core.compiler import FrontmatterCompiler, normalize_tags, read_tags
from gardenfm.core.models import CommaTags, NoTags, RewriteRule, TagList
from gardenfm.core.paths import sanitize_permalink
from gardenfm.core.utils.slug import generate_url_path


@pytest.fixture(name="compiler")
def compiler_fixture():
    return FrontmatterCompiler()


# --- build: defaults ---

def test_build_without_recognized_keys(compiler):
    """Only the publish marker and a path-derived permalink are produced."""
    fm = compiler.build({"unknown": "x", "aliases": ["a"]}, "notes/foo.md")
    assert fm == {"pub-blog": True, "permalink": "/notes/foo/"}


def test_compile_without_recognized_keys(compiler):
    assert compiler.compile({}, "notes/foo.md") == "---\npub-blog: true\npermalink: /notes/foo/\n---\n"


def test_build_handles_none_frontmatter(compiler):
    assert compiler.build(None, "a.md") == {"pub-blog": True, "permalink": "/a/"}


def test_build_does_not_mutate_input(compiler):
    raw = {"tags": ["a"], "dg-home": True, "position": {"start": 0}}
    compiler.build(raw, "a.md")
    assert raw == {"tags": ["a"], "dg-home": True, "position": {"start": 0}}


def test_build_key_order(compiler):
    """Marker, date, path, permalink, pass-through fields, then tags."""
    raw = {
        "tags": "t",
        "description": "d",
        "title": "T",
        "dg-permalink": "p",
        "dg-path": "moved.md",
        "publishDate": "2024-01-01",
    }
    assert list(compiler.build(raw, "a.md")) == [
        "pub-blog", "publishDate", "dg-path", "dg-permalink", "permalink", "title", "description", "tags",
    ]


def test_custom_publish_marker():
    compiler = FrontmatterCompiler(publish_marker="dg-publish")
    assert compiler.build({}, "a.md")["dg-publish"] is True


# --- publish date ---

def test_publish_date_passes_through(compiler):
    fm = compiler.build({"publishDate": "2024-01-01"}, "a.md")
    assert fm["publishDate"] == "2024-01-01"


def test_publish_date_absent(compiler):
    assert "publishDate" not in compiler.build({}, "a.md")


# --- permalink ---

def test_permalink_from_path_identity_rules(compiler):
    fm = compiler.build({}, "notes/foo.md")
    assert fm["permalink"] == "/" + generate_url_path("notes/foo.md", True)
    assert "dg-path" not in fm


def test_permalink_override(compiler):
    """dg-permalink is kept verbatim and permalink gets the sanitized form."""
    fm = compiler.build({"dg-permalink": "My Post!"}, "notes/foo.md")
    assert fm["dg-permalink"] == "My Post!"
    assert fm["permalink"] == sanitize_permalink("My Post!")


def test_permalink_override_rendered_quoted(compiler):
    block = compiler.compile({"dg-permalink": "My Post!"}, "notes/foo.md")
    assert 'dg-permalink: "My Post!"\n' in block
    assert 'permalink: "/My Post!/"\n' in block


def test_dg_path_override(compiler):
    """An explicit dg-path is recorded and drives the permalink."""
    fm = compiler.build({"dg-path": "garden/bar.md"}, "notes/foo.md")
    assert fm["dg-path"] == "garden/bar.md"
    assert fm["permalink"] == "/garden/bar/"


def test_dg_path_equal_to_note_path_is_omitted(compiler):
    fm = compiler.build({"dg-path": "notes/foo.md"}, "notes/foo.md")
    assert "dg-path" not in fm


def test_rewrite_rules_relocate_note():
    compiler = FrontmatterCompiler(rewrite_rules=[RewriteRule("Personal/Blog", "blog")])
    fm = compiler.build({}, "Personal/Blog/First Post.md")
    assert fm["dg-path"] == "blog/First Post.md"
    assert fm["permalink"] == "/blog/First-Post/"


def test_permalink_override_ignores_garden_path_for_permalink():
    compiler = FrontmatterCompiler(rewrite_rules=[RewriteRule("notes", "n")])
    fm = compiler.build({"dg-permalink": "/custom/"}, "notes/foo.md")
    assert fm["dg-path"] == "n/foo.md"
    assert fm["permalink"] == "/custom/"


def test_injected_collaborators():
    """Path collaborators are swappable."""
    calls = []

    def url_path(path, slugify_path):
        calls.append((path, slugify_path))
        return "slug"

    compiler = FrontmatterCompiler(
        garden_path_for=lambda path, rules: "moved/" + path,
        sanitize_permalink=lambda p: p.upper(),
        generate_url_path=url_path,
    )
    assert compiler.build({}, "x.md")["permalink"] == "/slug"
    assert calls == [("moved/x.md", True)]
    assert compiler.build({"dg-permalink": "abc"}, "x.md")["permalink"] == "ABC"


def test_collaborator_failure_propagates():
    def boom(path, rules):
        raise KeyError("rules")

    compiler = FrontmatterCompiler(garden_path_for=boom)
    with pytest.raises(KeyError):
        compiler.build({}, "x.md")


# --- pass-through ---

def test_title_and_description_pass_through(compiler):
    fm = compiler.build({"title": "Hello", "description": "World"}, "a.md")
    assert fm["title"] == "Hello"
    assert fm["description"] == "World"


def test_pass_through_omits_absent_and_empty(compiler):
    fm = compiler.build({"title": ""}, "a.md")
    assert "title" not in fm
    assert "description" not in fm


def test_other_keys_do_not_pass_through(compiler):
    fm = compiler.build({"cssclass": "wide", "dg-home": False}, "a.md")
    assert "cssclass" not in fm
    assert "dg-home" not in fm


# --- tags ---

@pytest.mark.parametrize("raw,expected", [
    ({"tags": "a, b,c"}, CommaTags("a, b,c")),
    ({"tags": ["a", "b"]}, TagList(("a", "b"))),
    ({"tags": "   "}, NoTags()),
    ({"tags": 5}, NoTags()),
    ({}, NoTags()),
])
def test_read_tags(raw, expected):
    assert read_tags(raw) == expected


def test_normalize_comma_tags():
    """Commas with optional whitespace separate tags."""
    assert normalize_tags(CommaTags("a, b,c")) == ["a", "b", "c"]


def test_tags_string_split(compiler):
    assert compiler.build({"tags": "a, b,c"}, "a.md")["tags"] == ["a", "b", "c"]


def test_tags_list_kept_in_order(compiler):
    assert compiler.build({"tags": ["z", "a"]}, "a.md")["tags"] == ["z", "a"]


def test_home_adds_garden_entry(compiler):
    assert compiler.build({"dg-home": True}, "a.md")["tags"] == ["gardenEntry"]


def test_home_does_not_duplicate_garden_entry(compiler):
    fm = compiler.build({"dg-home": True, "tags": ["gardenEntry", "x"]}, "a.md")
    assert fm["tags"] == ["gardenEntry", "x"]


def test_home_appends_after_existing_tags(compiler):
    assert compiler.build({"dg-home": True, "tags": "x, y"}, "a.md")["tags"] == ["x", "y", "gardenEntry"]


def test_home_does_not_mutate_raw_tag_list(compiler):
    tags = ["x"]
    compiler.build({"dg-home": True, "tags": tags}, "a.md")
    assert tags == ["x"]


def test_no_tags_key_when_empty(compiler):
    assert "tags" not in compiler.build({"tags": []}, "a.md")
    assert "tags" not in compiler.build({"tags": ""}, "a.md")


def test_malformed_tags_do_not_raise(compiler):
    assert "tags" not in compiler.build({"tags": {"a": 1}}, "a.md")


def test_compile_tags_block(compiler):
    block = compiler.compile({"tags": "a, b,c"}, "a.md")
    assert block.endswith("tags:\n  - a\n  - b\n  - c\n---\n")


# --- settings ---

def test_from_settings():
    settings = Settings(path_rewrite_rules="notes:n", publish_marker="dg-publish")
    compiler = FrontmatterCompiler.from_settings(settings)
    assert compiler.rewrite_rules == [RewriteRule("notes", "n")]
    assert compiler.build({}, "notes/a.md") == {"dg-publish": True, "dg-path": "n/a.md", "permalink": "/n/a/"}
