"""Unit tests for the unified, tree and JSON diff renderers."""

import json

import pytest

from markupdiff.diff.context import DiffDocument, LineChange, apply_context
from markupdiff.diff.line_diff import line_diff
from markupdiff.diff.renderers import JsonDiffRenderer, TreeDiffRenderer, UnifiedLineRenderer
from markupdiff.diff.renderers.json import render_to_file
from markupdiff.diff.renderers.tree import describe_node
from markupdiff.diff.renderers.unified import GREEN, RED, RESET, render_lines
from markupdiff.diff.tree_align import align_forest
from markupdiff.markup.nodes import AlignedNode, AlignmentStatus, ElementNode, NodeKind, TextNode


@pytest.fixture
def document():
    return DiffDocument(
        [
            LineChange("a", "unchanged", 1),
            LineChange("b", "removed", 2),
            LineChange("x", "added", 2),
            LineChange("c", "unchanged", 3),
        ],
        context_lines=1,
    )


@pytest.fixture
def updated_item():
    before = [ElementNode("li", {"key": "1"}, (TextNode("Item 1"),))]
    after = [ElementNode("li", {"key": "1"}, (TextNode("Item 1 updated"),))]
    return align_forest(before, after)


@pytest.mark.unit
class TestUnifiedLineRenderer:
    """Test UnifiedLineRenderer class."""

    def test_plain_with_line_numbers(self, document):
        lines = list(UnifiedLineRenderer(use_color=False).render(document))
        assert lines == ["1  a", "2 -b", "2 +x", "3  c"]

    def test_plain_without_line_numbers(self, document):
        lines = list(UnifiedLineRenderer(use_color=False, show_line_numbers=False).render(document))
        assert lines == [" a", "-b", "+x", " c"]

    def test_colors(self, document):
        lines = list(UnifiedLineRenderer(use_color=True, show_line_numbers=False).render(document))
        assert lines[1] == f"{RED}-b{RESET}"
        assert lines[2] == f"{GREEN}+x{RESET}"
        assert lines[0] == " a"

    def test_gutter_width_follows_largest_number(self):
        changes = [LineChange("nine", "unchanged", 9), LineChange("ten", "added", 10)]
        lines = list(UnifiedLineRenderer(use_color=False).render(changes))
        assert lines == [" 9  nine", "10 +ten"]

    def test_changes_without_numbers_have_no_gutter(self):
        changes = [LineChange("a", "added")]
        assert list(UnifiedLineRenderer(use_color=False).render(changes)) == ["+a"]

    def test_render_lines_helper(self):
        document = apply_context(line_diff("a\nb\n", "a\nc\n"), 1)
        assert render_lines(document, show_line_numbers=False) == " a\n-b\n+c"

    def test_empty(self):
        assert list(UnifiedLineRenderer().render([])) == []


@pytest.mark.unit
class TestTreeDiffRenderer:
    """Test TreeDiffRenderer class."""

    def test_plain_outline(self, updated_item):
        lines = list(TreeDiffRenderer(use_color=False).render(updated_item))
        assert lines == ['~ <li key="1">', "~   'Item 1 updated'"]

    def test_markers(self):
        forest = align_forest(
            [ElementNode("p", {"key": "old"}), ElementNode("p", {"key": "same"})],
            [ElementNode("p", {"key": "same"}), ElementNode("p", {"key": "new"})],
        )
        lines = list(TreeDiffRenderer(use_color=False).render(forest))
        assert lines == ['- <p key="old">', '  <p key="same">', '+ <p key="new">']

    def test_blank_unchanged_text_is_skipped(self):
        forest = align_forest([TextNode("\n  ")], [TextNode("\n  ")])
        assert list(TreeDiffRenderer(use_color=False).render(forest)) == []
        assert len(list(TreeDiffRenderer(use_color=False, skip_blank_text=False).render(forest))) == 1

    def test_colored_changes(self, updated_item):
        lines = list(TreeDiffRenderer(use_color=True).render(updated_item))
        assert lines[0].startswith("\033[33m")
        assert lines[0].endswith(RESET)

    def test_describe_node(self):
        element = AlignedNode(
            kind=NodeKind.ELEMENT,
            status=AlignmentStatus.UNCHANGED,
            key="index-0",
            tag_name="a",
            attributes={"title": "t", "href": "/x"},
        )
        assert describe_node(element) == '<a href="/x" title="t">'
        text = AlignedNode(kind=NodeKind.TEXT, status=AlignmentStatus.ADDED, key="index-0", text_content="hi")
        assert describe_node(text) == "'hi'"
        root = AlignedNode(kind=NodeKind.ROOT, status=AlignmentStatus.UNCHANGED, key="index-0")
        assert describe_node(root) == "#root"


@pytest.mark.unit
class TestJsonDiffRenderer:
    """Test JsonDiffRenderer class."""

    def test_lines_only(self, document):
        data = json.loads(JsonDiffRenderer().render(document))
        assert data["type"] == "markupdiff"
        assert "tree" not in data
        assert data["lines"]["context_lines"] == 1
        assert data["lines"]["changes"][1] == {"type": "removed", "content": "b", "line_number": 2}
        assert data["lines"]["statistics"] == {"added": 1, "removed": 1, "unchanged": 2}

    def test_tree_only(self, updated_item):
        data = json.loads(JsonDiffRenderer().render(tree=updated_item))
        assert "lines" not in data
        node = data["tree"]["nodes"][0]
        assert node["status"] == "updated"
        assert node["tagName"] == "li"
        assert node["children"][0]["textContent"] == "Item 1 updated"
        assert data["tree"]["statistics"] == {"added": 0, "removed": 0, "updated": 2, "unchanged": 0}

    def test_compact_output(self, document):
        output = JsonDiffRenderer(pretty_print=False).render(document)
        assert "\n" not in output

    def test_render_to_file(self, tmp_path, document, updated_item):
        output_path = tmp_path / "diff.json"
        render_to_file(str(output_path), document, updated_item, indent=4)
        data = json.loads(output_path.read_text(encoding="utf-8"))
        assert set(data) == {"type", "lines", "tree"}
