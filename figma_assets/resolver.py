"""
資產解析 — 從 Figma 文件樹取出可匯出的資產清單

page → (frame) → 頂層節點；開啟 export_variants 時，
有子節點的組件會展開成每個 variant 一個資產：

    star / "filled=true, size=large"  →  star/filled=true--size=large
"""

from typing import Optional

from .errors import DuplicateNameWarning, NotFoundError
from .models import AssetDescriptor
from .reporter import Reporter

VARIANT_SEPARATOR = "--"


def find_child(node: dict, name: str, kind: str) -> dict:
    """以名稱精確比對（區分大小寫）找子節點，找不到則丟 NotFoundError."""
    for child in node.get("children", []):
        if child.get("name") == name:
            return child
    raise NotFoundError(kind, name)


def variant_name(parent_name: str, child_name: str) -> str:
    """'filled=true, size=large' → '<parent>/filled=true--size=large'."""
    parts = [part.strip() for part in child_name.split(",")]
    return f"{parent_name}/{VARIANT_SEPARATOR.join(parts)}"


def _expand(nodes: list, export_variants: bool) -> list:
    descriptors = []
    for node in nodes:
        children = node.get("children") or []
        if not export_variants or not children:
            descriptors.append(AssetDescriptor(id=node["id"], name=node["name"]))
            continue
        for child in children:
            descriptors.append(AssetDescriptor(
                id=child["id"],
                name=variant_name(node["name"], child["name"]),
            ))
    return descriptors


def dedupe(descriptors: list, reporter: Optional[Reporter] = None) -> list:
    """依 name 去重：先出現者保留，後出現者丟棄並回報一次警告."""
    reporter = reporter or Reporter()
    seen: dict[str, AssetDescriptor] = {}
    result = []
    for descriptor in descriptors:
        first = seen.get(descriptor.name)
        if first is not None:
            reporter.duplicate_name(DuplicateNameWarning(
                name=descriptor.name,
                kept_id=first.id,
                dropped_id=descriptor.id,
            ))
            continue
        seen[descriptor.name] = descriptor
        result.append(descriptor)
    return result


def resolve(
    tree: dict,
    page_name: str,
    frame_name: Optional[str] = None,
    export_variants: bool = True,
    reporter: Optional[Reporter] = None,
) -> list:
    """解析文件樹，回傳依文件順序排列、名稱不重複的 AssetDescriptor 清單."""
    page = find_child(tree, page_name, "page")
    container = find_child(page, frame_name, "frame") if frame_name else page
    return dedupe(_expand(container.get("children", []), export_variants), reporter)
