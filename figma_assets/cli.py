#!/usr/bin/env python3
"""
figma-assets CLI — 從 Figma 匯出圖示 / 圖片到本機目錄

  python -m figma_assets.cli export --page assets --frame icons   # 匯出
  python -m figma_assets.cli list --page assets                   # 預覽資產名稱
  python -m figma_assets.cli clean --assets-path ./icons          # 清空輸出目錄
"""

import argparse
import asyncio
import sys

from figma_assets import __version__

from .config import DEFAULT_CONFIG_PATH, build_export_config, load_config
from .errors import ConfigError, NotFoundError, RemoteRequestError
from .exporter import FigmaExporter, clean_directory
from .models import SUPPORTED_FORMATS
from .reporter import ConsoleReporter


def _overrides_from_args(args) -> dict:
    return {
        "file_id": getattr(args, "file_id", None),
        "page": getattr(args, "page", None),
        "frame": getattr(args, "frame", None),
        "assets_path": getattr(args, "assets_path", None),
        "format": getattr(args, "format", None),
        "scale": getattr(args, "scale", None),
        # store_true 旗標：未指定時傳 None，才不會覆寫設定檔
        "export_variants": False if getattr(args, "no_variants", False) else None,
        "batch_size": getattr(args, "batch_size", None),
        "concurrency_limit": getattr(args, "concurrency", None),
        "skip_existing_files": True if getattr(args, "skip_existing", False) else None,
        "depth": getattr(args, "depth", None),
        "remove_from_name": getattr(args, "remove_from_name", None),
    }


def _print_remote_error(e: RemoteRequestError, file_id: str) -> None:
    if e.status_code == 403:
        print("❌ Figma API 403：Token 無效或已過期，請重新產生 FIGMA_TOKEN。")
    elif e.status_code == 404:
        print(f"❌ Figma API 404：找不到檔案 '{file_id}'，請確認 file id 是否正確。")
    else:
        print(f"❌ Figma API 錯誤：{e}")


def _build_exporter(args, config: dict):
    try:
        export_config = build_export_config(config, **_overrides_from_args(args))
    except ConfigError as e:
        print(f"❌ {e}")
        print("   請在 figma-assets.config.json 或命令列參數中設定；token 也可用 FIGMA_TOKEN 環境變數。")
        return None
    return FigmaExporter(export_config, reporter=ConsoleReporter(verbose=getattr(args, "verbose", False)))


def cmd_export(args, config: dict) -> int:
    """Export: 解析 → 取得匯出網址 → 下載."""
    exporter = _build_exporter(args, config)
    if exporter is None:
        return 1
    cfg = exporter.config
    target = f"{cfg.page}/{cfg.frame}" if cfg.frame else cfg.page
    print(f"📥 Exporting '{target}' from Figma file {cfg.file_id} → {cfg.assets_path}")

    if args.clean:
        removed = exporter.clean_assets()
        print(f"   🧹 Removed {removed} files from {cfg.assets_path}")

    try:
        summary = asyncio.run(exporter.create_assets())
    except NotFoundError as e:
        print(f"❌ {e}")
        return 1
    except RemoteRequestError as e:
        _print_remote_error(e, cfg.file_id)
        return 1

    print(f"   ✅ Saved {len(summary.saved)} assets")
    if summary.failed:
        print(f"   ⚠️  {len(summary.failed)} downloads failed:")
        for descriptor, reason in summary.failed:
            print(f"     - {descriptor.name}: {reason}")
        return 2
    return 0


def cmd_list(args, config: dict) -> int:
    """List: 只解析並列出資產名稱，不下載."""
    exporter = _build_exporter(args, config)
    if exporter is None:
        return 1
    try:
        assets = exporter.get_assets()
    except NotFoundError as e:
        print(f"❌ {e}")
        return 1
    except RemoteRequestError as e:
        _print_remote_error(e, exporter.config.file_id)
        return 1
    for asset in assets:
        print(f"{asset.id}\t{asset.name}")
    print(f"\nTotal assets: {len(assets)}")
    return 0


def cmd_clean(args, config: dict) -> int:
    """Clean: 清空輸出目錄（保留 README.md）；不需要 token."""
    assets_path = args.assets_path or config.get("assetsPath") or "assets"
    removed = clean_directory(assets_path)
    print(f"🧹 Removed {removed} files from {assets_path}")
    return 0


def _add_target_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--file-id", help="Figma file id")
    p.add_argument("--page", help="Page name (exact match)")
    p.add_argument("--frame", help="Frame name inside the page (optional)")
    p.add_argument("--no-variants", action="store_true", help="Do not expand component variants")
    p.add_argument("--depth", type=int, help="Document tree depth to fetch")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="figma-assets: export Figma assets to a local directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    export_p = sub.add_parser("export", help="Export assets",
        epilog="Examples:\n  figma-assets export --page assets --frame icons\n  figma-assets export --format png --scale 2 --skip-existing",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_target_args(export_p)
    export_p.add_argument("--assets-path", help="Output directory")
    export_p.add_argument("--format", choices=SUPPORTED_FORMATS, help="Export format")
    export_p.add_argument("--scale", type=float, help="Export scale (0.01 - 4)")
    export_p.add_argument("--batch-size", type=int, help="Node ids per /images request")
    export_p.add_argument("--concurrency", type=int, help="Max concurrent downloads")
    export_p.add_argument("--skip-existing", action="store_true", help="Skip files that already exist")
    export_p.add_argument("--remove-from-name", help="Regex removed from every file name")
    export_p.add_argument("--clean", action="store_true", help="Empty the output directory first (keeps README.md)")
    export_p.add_argument("--verbose", action="store_true", help="Print every saved file")

    list_p = sub.add_parser("list", help="List resolved asset names",
        epilog="Examples:\n  figma-assets list --page assets --frame icons",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_target_args(list_p)

    clean_p = sub.add_parser("clean", help="Empty the output directory (keeps README.md)")
    clean_p.add_argument("--assets-path", help="Output directory")

    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == "export":
        return cmd_export(args, config)
    elif args.command == "list":
        return cmd_list(args, config)
    elif args.command == "clean":
        return cmd_clean(args, config)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
