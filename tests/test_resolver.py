"""
資產解析測試：page / frame 查找、variant 命名、去重與順序。
"""
import pytest

from figma_assets.errors import NotFoundError
from figma_assets.models import AssetDescriptor
from figma_assets.resolver import dedupe, find_child, resolve, variant_name

from conftest import node


# ─── variant_name ────────────────────────────────────────────────────────────

class TestVariantName:
    def test_comma_separated_properties(self):
        assert variant_name("star", "filled=true, size=large") == "star/filled=true--size=large"
        assert variant_name("star", "filled=false, size=large") == "star/filled=false--size=large"

    def test_single_property(self):
        assert variant_name("star", "filled=true") == "star/filled=true"

    def test_parts_are_trimmed(self):
        assert variant_name("btn", "  a=1 ,b=2,  c=3 ") == "btn/a=1--b=2--c=3"


# ─── find_child ──────────────────────────────────────────────────────────────

class TestFindChild:
    def test_exact_match(self, document):
        assert find_child(document, "assets", "page")["id"] == "1:0"

    def test_case_sensitive(self, document):
        with pytest.raises(NotFoundError) as exc:
            find_child(document, "Assets", "page")
        assert exc.value.kind == "page"
        assert exc.value.name == "Assets"

    def test_node_without_children(self):
        with pytest.raises(NotFoundError):
            find_child({"id": "1", "name": "leaf"}, "x", "frame")


# ─── resolve ─────────────────────────────────────────────────────────────────

class TestResolve:
    def test_frame_without_variants(self, document):
        assets = resolve(document, "assets", "icons", export_variants=False)
        assert assets == [
            AssetDescriptor(id="3:1", name="star"),
            AssetDescriptor(id="3:2", name="gear"),
        ]

    def test_variants_expanded(self, document):
        assets = resolve(document, "assets", "component", export_variants=True)
        assert [(a.id, a.name) for a in assets] == [
            ("4:1", "star/filled=true--size=large"),
            ("4:2", "star/filled=false--size=large"),
        ]

    def test_variants_disabled_keeps_component(self, document):
        assets = resolve(document, "assets", "component", export_variants=False)
        assert [(a.id, a.name) for a in assets] == [("4:0", "star")]

    def test_leaf_nodes_not_expanded(self, document):
        # icons 沒有子節點，開啟 variants 也只產生一個資產
        assets = resolve(document, "assets", "icons", export_variants=True)
        assert [a.name for a in assets] == ["star", "gear"]

    def test_without_frame_uses_page_children(self, document):
        assets = resolve(document, "assets", export_variants=True)
        assert [a.name for a in assets] == [
            "icons/star",
            "icons/gear",
            "component/star",
        ]

    def test_missing_page(self, document):
        with pytest.raises(NotFoundError) as exc:
            resolve(document, "nope", "icons")
        assert exc.value.kind == "page"

    def test_missing_frame(self, document):
        with pytest.raises(NotFoundError) as exc:
            resolve(document, "assets", "nope")
        assert exc.value.kind == "frame"

    def test_empty_page(self, document):
        assert resolve(document, "drafts") == []

    def test_deterministic(self, document):
        first = resolve(document, "assets", export_variants=True)
        second = resolve(document, "assets", export_variants=True)
        assert first == second

    def test_fresh_descriptors_have_no_url(self, document):
        for asset in resolve(document, "assets", "icons"):
            assert asset.url is None
            assert asset.format is None

    def test_tree_not_mutated(self, document):
        import copy
        before = copy.deepcopy(document)
        resolve(document, "assets", export_variants=True)
        assert document == before


# ─── dedupe ──────────────────────────────────────────────────────────────────

class TestDedupe:
    def test_first_seen_wins(self, reporter):
        items = [
            AssetDescriptor("1", "a"),
            AssetDescriptor("2", "b"),
            AssetDescriptor("3", "a"),
            AssetDescriptor("4", "c"),
            AssetDescriptor("5", "b"),
            AssetDescriptor("6", "a"),
        ]
        result = dedupe(items, reporter)
        assert [(d.id, d.name) for d in result] == [("1", "a"), ("2", "b"), ("4", "c")]
        warnings = reporter.of("duplicate_name")
        assert len(warnings) == len(items) - len(result)
        assert [(w.name, w.kept_id, w.dropped_id) for w in warnings] == [
            ("a", "1", "3"),
            ("b", "2", "5"),
            ("a", "1", "6"),
        ]

    def test_no_duplicates_no_warnings(self, reporter):
        items = [AssetDescriptor("1", "a"), AssetDescriptor("2", "b")]
        assert dedupe(items, reporter) == items
        assert reporter.events == []

    def test_default_reporter_is_silent(self, capsys):
        dedupe([AssetDescriptor("1", "a"), AssetDescriptor("2", "a")])
        assert capsys.readouterr().out == ""

    def test_duplicates_after_variant_expansion(self, reporter):
        tree = node("0:0", "Document", [
            node("1:0", "page", [
                node("2:0", "star", [
                    node("2:1", "filled=true"),
                    node("2:2", "filled=true"),
                ]),
                node("3:0", "gear"),
                node("3:1", "gear"),
            ]),
        ])
        assets = resolve(tree, "page", export_variants=True, reporter=reporter)
        assert [(a.id, a.name) for a in assets] == [
            ("2:1", "star/filled=true"),
            ("3:0", "gear"),
        ]
        assert len(reporter.of("duplicate_name")) == 2
