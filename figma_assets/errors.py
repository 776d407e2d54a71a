"""
例外與警告事件

resolve / batch export 階段的錯誤會中止整個匯出；
單一資產下載失敗（DownloadFailure）只影響該資產。
"""

from dataclasses import dataclass
from typing import Optional


class FigmaAssetsError(Exception):
    """所有 figma_assets 例外的基底."""


class ConfigError(FigmaAssetsError):
    """設定缺漏或格式錯誤."""


class NotFoundError(FigmaAssetsError):
    """文件樹中找不到指定的 page / frame."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Cannot find {kind} '{name}' in the Figma document, check your settings")


class RemoteRequestError(FigmaAssetsError):
    """Figma API 回傳非成功狀態或連線失敗."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class DownloadFailure(FigmaAssetsError):
    """單一資產下載 / 寫檔失敗，不中止其他下載."""

    def __init__(self, descriptor, reason: str):
        self.descriptor = descriptor
        self.reason = reason
        super().__init__(f"{descriptor.name}: {reason}")


@dataclass
class DuplicateNameWarning:
    """重名資產被丟棄時的事件紀錄（不是例外）."""
    name: str
    kept_id: str
    dropped_id: str
