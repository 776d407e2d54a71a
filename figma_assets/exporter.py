"""
FigmaExporter — 匯出流程的對外入口

    exporter = FigmaExporter(config).set_assets()
    asyncio.run(exporter.create_assets())

    # 同一份解析結果可以用不同設定匯出多次
    asyncio.run(exporter.create_assets(
        lambda assets: [a for a in assets if a.name.startswith("images/")],
        assets_path="public/img", format="png",
    ))

流程順序固定：取得文件樹 → 解析 → 分批取得下載網址 → 並行下載。
"""

import asyncio
import re
import shutil
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

import httpx

from .batching import export_batches
from .downloader import download_all, download_asset
from .figma_client import FigmaAPIClient
from .models import AssetDescriptor, DownloadSummary, ExportConfig
from .reporter import Reporter
from .resolver import dedupe, resolve

AssetTransform = Callable[[list], list]

# clean_assets 不刪除的檔案
_PRESERVED_FILES = {"README.md"}

# 這些欄位不同時，快取的 assets 不能沿用
_RESOLUTION_FIELDS = ("file_id", "page", "frame", "export_variants", "depth")


class FigmaExporter:
    """將 Figma 檔案中某 page / frame 的資產匯出到本機目錄."""

    def __init__(
        self,
        config: ExportConfig,
        client: Optional[FigmaAPIClient] = None,
        reporter: Optional[Reporter] = None,
    ):
        self.config = config
        self.client = client or FigmaAPIClient(config.token)
        self.reporter = reporter or Reporter()
        self.assets: Optional[list] = None
        self._assets_config: Optional[ExportConfig] = None

    def get_assets(self, **overrides) -> list:
        """每次都重新取得文件樹並解析（不快取）."""
        cfg = self.config.with_overrides(**overrides)
        data = self.client.get_file(cfg.file_id, depth=cfg.depth)
        return resolve(
            data.get("document", {}),
            cfg.page,
            cfg.frame,
            export_variants=cfg.export_variants,
            reporter=self.reporter,
        )

    def set_assets(self, **overrides) -> "FigmaExporter":
        self.assets = self.get_assets(**overrides)
        self._assets_config = self.config.with_overrides(**overrides)
        return self

    def _resolution_changed(self, overrides: dict) -> bool:
        cached = self._assets_config or self.config
        return any(
            overrides.get(name) is not None and overrides[name] != getattr(cached, name)
            for name in _RESOLUTION_FIELDS
        )

    def _strip_names(self, assets: list, pattern: str) -> list:
        """依 remove_from_name 移除檔名中符合的部分；移除後重名者只保留第一個."""
        regex = re.compile(pattern)
        return dedupe([replace(a, name=regex.sub("", a.name)) for a in assets], self.reporter)

    def export_assets(self, assets: list, **overrides) -> list:
        cfg = self.config.with_overrides(**overrides)
        return export_batches(
            self.client,
            cfg.file_id,
            assets,
            format=cfg.format,
            scale=cfg.scale,
            batch_size=cfg.batch_size,
            reporter=self.reporter,
        )

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"X-Figma-Token": self.config.token},
            follow_redirects=True,
            timeout=60,
        )

    async def save_asset(
        self,
        asset: AssetDescriptor,
        name: Optional[str] = None,
        assets_path: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
    ) -> Optional[Path]:
        """下載單一已匯出的資產；name 只覆寫這次存檔的檔名."""
        if not asset.url:
            self.reporter.missing_url(1)
            return None
        target = replace(asset, name=name) if name else asset
        root = assets_path or self.config.assets_path
        if http is not None:
            path = await download_asset(http, target, root)
        else:
            async with self._http_client() as client:
                path = await download_asset(client, target, root)
        self.reporter.asset_saved(target, path)
        return path

    async def create_assets(
        self,
        transform: Optional[AssetTransform] = None,
        http: Optional[httpx.AsyncClient] = None,
        **overrides,
    ) -> DownloadSummary:
        """解析 → 匯出 → 下載；overrides 只影響這次呼叫."""
        cfg = self.config.with_overrides(**overrides)
        if self.assets is not None and not self._resolution_changed(overrides):
            # 複製一份，避免不同 format 的匯出互相覆寫 url
            assets = [replace(a, url=None, format=None) for a in self.assets]
        else:
            assets = self.get_assets(**overrides)
        if transform is not None:
            assets = transform(assets)
        if cfg.remove_from_name:
            assets = self._strip_names(assets, cfg.remove_from_name)

        self.export_assets(assets, **overrides)
        return await download_all(
            assets,
            cfg.assets_path,
            token=cfg.token,
            concurrency_limit=cfg.concurrency_limit,
            skip_existing=cfg.skip_existing_files,
            reporter=self.reporter,
            http=http,
        )

    def clean_assets(self, assets_path: Optional[str] = None) -> int:
        return clean_directory(assets_path or self.config.assets_path)


def clean_directory(assets_path) -> int:
    """清空輸出目錄（保留最上層的 README.md），回傳刪除的檔案數."""
    root = Path(assets_path)
    if not root.is_dir():
        return 0
    removed = 0
    for entry in root.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            removed += sum(1 for p in entry.rglob("*") if p.is_file())
            shutil.rmtree(entry)
        elif entry.name not in _PRESERVED_FILES:
            entry.unlink()
            removed += 1
    return removed


def export_assets_from_config(config: ExportConfig, reporter: Optional[Reporter] = None) -> DownloadSummary:
    """一次性匯出（同步包裝）."""
    exporter = FigmaExporter(config, reporter=reporter)
    return asyncio.run(exporter.create_assets())
