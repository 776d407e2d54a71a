"""
下載排程 — 有上限的並行下載並寫入輸出目錄

- 沒有 url 的資產直接略過
- skip_existing 時，相對路徑已存在的檔案不重新下載（重跑不會覆寫）
- 單一下載失敗只會記錄，不影響其他下載，也不讓 download_all 丟例外
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import httpx

from .errors import DownloadFailure
from .models import DownloadSummary
from .reporter import Reporter


def existing_files(root) -> set:
    """回傳 root 底下所有檔案的相對路徑（POSIX 格式）."""
    root = Path(root)
    if not root.is_dir():
        return set()
    found = set()
    for dirpath, _dirnames, filenames in os.walk(root):
        for filename in filenames:
            found.add((Path(dirpath) / filename).relative_to(root).as_posix())
    return found


def _target_path(root, descriptor) -> Path:
    """root/<name>.<format>；name 解析後必須仍在 root 之內."""
    path = Path(root) / descriptor.relative_path
    try:
        path.resolve().relative_to(Path(root).resolve())
    except ValueError:
        raise DownloadFailure(descriptor, "path escapes assets directory") from None
    return path


async def download_asset(http: httpx.AsyncClient, descriptor, root) -> Path:
    """下載單一資產到 root/<name>.<format>，失敗時丟出 DownloadFailure."""
    path = _target_path(root, descriptor)
    try:
        async with http.stream("GET", descriptor.url) as resp:
            if not resp.is_success:
                raise DownloadFailure(descriptor, f"HTTP {resp.status_code}")
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "wb") as f:
                    async for chunk in resp.aiter_bytes():
                        await asyncio.to_thread(f.write, chunk)
            except (httpx.HTTPError, OSError) as e:
                # 寫到一半的檔案不保留，否則下次 skip_existing 會誤判
                path.unlink(missing_ok=True)
                raise DownloadFailure(descriptor, str(e) or type(e).__name__) from e
    except httpx.HTTPError as e:
        raise DownloadFailure(descriptor, str(e) or type(e).__name__) from e
    return path


async def download_all(
    descriptors: list,
    root,
    token: str = "",
    concurrency_limit: int = 5,
    skip_existing: bool = False,
    reporter: Optional[Reporter] = None,
    http: Optional[httpx.AsyncClient] = None,
) -> DownloadSummary:
    """並行下載所有資產（最多 concurrency_limit 個同時進行），等全部結束才回傳."""
    reporter = reporter or Reporter()
    summary = DownloadSummary()

    pending = [d for d in descriptors if d.url]
    summary.missing_url = len(descriptors) - len(pending)
    if summary.missing_url:
        reporter.missing_url(summary.missing_url)

    if skip_existing:
        existing = existing_files(root)
        before = len(pending)
        pending = [d for d in pending if d.relative_path not in existing]
        summary.skipped = before - len(pending)
        reporter.skipped_existing(summary.skipped)

    if not pending:
        return summary

    owns_client = http is None
    if owns_client:
        http = httpx.AsyncClient(
            headers={"X-Figma-Token": token},
            follow_redirects=True,
            timeout=60,
        )

    semaphore = asyncio.Semaphore(concurrency_limit)

    async def run_with_semaphore(descriptor):
        async with semaphore:
            return await download_asset(http, descriptor, root)

    try:
        tasks = [asyncio.create_task(run_with_semaphore(d)) for d in pending]
        results = await asyncio.gather(*tasks, return_exceptions=True)
    finally:
        if owns_client:
            await http.aclose()

    for descriptor, result in zip(pending, results):
        if isinstance(result, BaseException):
            reason = result.reason if isinstance(result, DownloadFailure) else str(result)
            summary.failed.append((descriptor, reason))
            reporter.download_failed(descriptor, reason)
        else:
            summary.add_saved(result)
            reporter.asset_saved(descriptor, result)
    return summary
