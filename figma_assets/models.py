"""
資料模型 — 資產描述、匯出設定、下載結果
"""

import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional

SUPPORTED_FORMATS = ("svg", "png", "jpg", "pdf")


@dataclass
class AssetDescriptor:
    """可匯出的單一資產.

    name 是相對於輸出目錄的路徑（不含副檔名，以 / 分隔）；
    url / format 在 export_batches 之後才會填入。
    """
    id: str
    name: str
    url: Optional[str] = None
    format: Optional[str] = None

    @property
    def relative_path(self) -> str:
        return f"{self.name}.{self.format}"


@dataclass(frozen=True)
class ExportConfig:
    """單次匯出的不可變設定；以 with_overrides() 產生覆寫後的新設定."""
    token: str
    file_id: str
    page: str
    frame: Optional[str] = None
    assets_path: str = "assets"
    format: str = "svg"
    scale: float = 1
    export_variants: bool = True
    batch_size: int = 100
    concurrency_limit: int = 5
    skip_existing_files: bool = False
    depth: Optional[int] = None
    remove_from_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.format not in SUPPORTED_FORMATS:
            raise ValueError(f"format must be one of {', '.join(SUPPORTED_FORMATS)}, got '{self.format}'")
        # Figma /images 只接受 0.01 ~ 4
        if not 0.01 <= self.scale <= 4:
            raise ValueError(f"scale must be between 0.01 and 4, got {self.scale}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.concurrency_limit < 1:
            raise ValueError(f"concurrency_limit must be >= 1, got {self.concurrency_limit}")
        if self.remove_from_name:
            try:
                re.compile(self.remove_from_name)
            except re.error as e:
                raise ValueError(f"remove_from_name is not a valid regex: {e}") from e

    def with_overrides(self, **overrides) -> "ExportConfig":
        """淺層合併覆寫值，回傳新設定（原設定不變）。值為 None 的覆寫會被忽略."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown config override(s): {', '.join(sorted(unknown))}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)


@dataclass
class DownloadSummary:
    """download_all 的結果；失敗項目不會讓整體失敗."""
    saved: list = field(default_factory=list)
    skipped: int = 0
    missing_url: int = 0
    failed: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def add_saved(self, path: Path) -> None:
        self.saved.append(path)
