"""設定檔載入與基本驗證."""

import json
import os
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .models import SUPPORTED_FORMATS, ExportConfig

DEFAULT_CONFIG_PATH = "figma-assets.config.json"

# 設定檔欄位（camelCase）→ ExportConfig 欄位
_KEY_MAP = {
    "token": "token",
    "figmaPersonalToken": "token",
    "fileId": "file_id",
    "page": "page",
    "frame": "frame",
    "assetsPath": "assets_path",
    "format": "format",
    "scale": "scale",
    "exportVariants": "export_variants",
    "batchSize": "batch_size",
    "concurrencyLimit": "concurrency_limit",
    "skipExistingFiles": "skip_existing_files",
    "depth": "depth",
    "removeFromName": "remove_from_name",
}

_EXPECTED_TYPES = {
    "scale": (int, float),
    "exportVariants": bool,
    "batchSize": int,
    "concurrencyLimit": int,
    "skipExistingFiles": bool,
    "depth": int,
    "removeFromName": str,
}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    for key in cfg:
        if key not in _KEY_MAP:
            known = ", ".join(sorted(_KEY_MAP))
            _warn(f"未知欄位 '{key}'（已知欄位：{known}）")

    for key, expected in _EXPECTED_TYPES.items():
        val = cfg.get(key)
        if val is None:
            continue
        # bool 是 int 的子類別，數值欄位不接受 true/false
        if isinstance(val, bool) and expected is not bool:
            _warn(f"{key} 應為數字，目前是 bool")
        elif not isinstance(val, expected):
            _warn(f"{key} 型別錯誤，目前是 {type(val).__name__}")

    fmt = cfg.get("format")
    if fmt and fmt not in SUPPORTED_FORMATS:
        valid = ", ".join(SUPPORTED_FORMATS)
        _warn(f"format '{fmt}' 不在支援值中（{valid}）")

    if "token" in cfg and "figmaPersonalToken" in cfg:
        _warn("同時設定 token 與 figmaPersonalToken，將使用 token")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def build_export_config(cfg: dict, **overrides) -> ExportConfig:
    """將設定檔 dict 轉為 ExportConfig；overrides（snake_case）中為 None 的值不覆寫.

    token 未設定時改用 FIGMA_TOKEN 環境變數。
    """
    values: dict = {}
    # figmaPersonalToken 先套用，讓 token 優先
    for key in sorted(cfg, key=lambda k: k != "figmaPersonalToken"):
        field_name = _KEY_MAP.get(key)
        if field_name and cfg[key] is not None:
            values[field_name] = cfg[key]
    for key, val in overrides.items():
        if val is not None:
            values[key] = val

    if not values.get("token"):
        values["token"] = os.environ.get("FIGMA_TOKEN", "")

    missing = [name for name in ("token", "file_id", "page") if not values.get(name)]
    if missing:
        raise ConfigError(f"缺少必要設定：{', '.join(missing)}")

    try:
        return ExportConfig(**values)
    except (TypeError, ValueError) as e:
        raise ConfigError(str(e)) from e
