"""
figma-export-assets — 從 Figma 匯出圖示、圖片與組件 variants

解析 page / frame → 展開 variants → 分批取得匯出網址 → 並行下載。
"""

__version__ = "1.1.0"

from .models import AssetDescriptor, ExportConfig, DownloadSummary
from .errors import (
    FigmaAssetsError,
    ConfigError,
    NotFoundError,
    RemoteRequestError,
    DownloadFailure,
    DuplicateNameWarning,
)
from .reporter import Reporter, ConsoleReporter
from .figma_client import FigmaAPIClient
from .resolver import resolve, variant_name, dedupe
from .batching import export_batches
from .downloader import download_all, download_asset, existing_files
from .exporter import FigmaExporter, clean_directory, export_assets_from_config
from .config import load_config, validate_config, build_export_config

__all__ = [
    "__version__",
    "AssetDescriptor",
    "ExportConfig",
    "DownloadSummary",
    "FigmaAssetsError",
    "ConfigError",
    "NotFoundError",
    "RemoteRequestError",
    "DownloadFailure",
    "DuplicateNameWarning",
    "Reporter",
    "ConsoleReporter",
    "FigmaAPIClient",
    "resolve",
    "variant_name",
    "dedupe",
    "export_batches",
    "download_all",
    "download_asset",
    "existing_files",
    "FigmaExporter",
    "clean_directory",
    "export_assets_from_config",
    "load_config",
    "validate_config",
    "build_export_config",
]
