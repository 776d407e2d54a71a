"""
Figma REST API 讀取

只需要兩個端點：GET /files/{key} 取得文件樹、GET /images/{key} 取得批次匯出網址。
"""

from typing import Optional

import requests

from .errors import RemoteRequestError


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str, timeout: float = 60):
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def _get(self, url: str, params: dict) -> dict:
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise RemoteRequestError(f"Figma API {status}: {url}", status_code=status, url=url) from e
        except requests.RequestException as e:
            raise RemoteRequestError(f"Figma API request failed: {e}", url=url) from e
        return resp.json()

    def get_file(self, file_key: str, depth: Optional[int] = None) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}"
        params = {}
        if depth is not None:
            params["depth"] = depth
        return self._get(url, params)

    def get_image_urls(self, file_key: str, node_ids: list, format: str = "svg", scale: float = 1) -> dict:
        """回傳 { node_id: url }；Figma 轉檔失敗的節點值為 None 或不存在."""
        url = f"{self.BASE_URL}/images/{file_key}"
        params = {"ids": ",".join(node_ids), "format": format, "scale": scale}
        data = self._get(url, params)
        if data.get("err"):
            raise RemoteRequestError(f"Figma image export error: {data['err']}", status_code=data.get("status"), url=url)
        return data.get("images") or {}
