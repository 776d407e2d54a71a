"""
Reporter — 匯出過程的警告 / 進度事件

函式庫預設使用靜默的 Reporter()；CLI 注入 ConsoleReporter；
測試可繼承 Reporter 記錄事件。
"""

from .errors import DuplicateNameWarning


class Reporter:
    """所有 hook 預設不做事."""

    def duplicate_name(self, warning: DuplicateNameWarning) -> None:
        pass

    def batch_requested(self, index: int, total: int, size: int) -> None:
        pass

    def missing_url(self, count: int) -> None:
        pass

    def skipped_existing(self, count: int) -> None:
        pass

    def asset_saved(self, descriptor, path) -> None:
        pass

    def download_failed(self, descriptor, reason: str) -> None:
        pass


class ConsoleReporter(Reporter):
    """以 print 輸出到終端機."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def duplicate_name(self, warning: DuplicateNameWarning) -> None:
        print(
            f"   ⚠️  Duplicate asset name '{warning.name}' "
            f"(id {warning.dropped_id}), keeping id {warning.kept_id}"
        )

    def batch_requested(self, index: int, total: int, size: int) -> None:
        print(f"   [{index}/{total}] Requesting export URLs for {size} assets...")

    def missing_url(self, count: int) -> None:
        print(f"   ⚠️  {count} assets have no export URL and will be skipped")

    def skipped_existing(self, count: int) -> None:
        print(f"   ⏭️  Skipped {count} existing files")

    def asset_saved(self, descriptor, path) -> None:
        if self.verbose:
            print(f"   ✅ {path}")

    def download_failed(self, descriptor, reason: str) -> None:
        print(f"   ❌ Failed to download '{descriptor.name}': {reason}")
