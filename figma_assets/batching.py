"""
批次匯出 — 分批向 /images 取得下載網址

Figma 拒絕過長的 ids 清單，所以每批最多 batch_size 個；
各批依序送出（不並行），避免觸發 rate limit。
"""

from typing import Iterator, Optional

from .reporter import Reporter


def chunked(items: list, size: int) -> Iterator[list]:
    if size < 1:
        raise ValueError(f"batch size must be >= 1, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]


def export_batches(
    client,
    file_id: str,
    descriptors: list,
    format: str = "svg",
    scale: float = 1,
    batch_size: int = 100,
    reporter: Optional[Reporter] = None,
) -> list:
    """就地填入每個 descriptor 的 url / format，回傳同一個 list.

    任一批失敗會丟出 RemoteRequestError；先前批次已填入的 url 保留。
    """
    reporter = reporter or Reporter()
    batches = list(chunked(descriptors, batch_size))
    for index, batch in enumerate(batches, start=1):
        reporter.batch_requested(index, len(batches), len(batch))
        urls = client.get_image_urls(file_id, [d.id for d in batch], format=format, scale=scale)
        for descriptor in batch:
            url = urls.get(descriptor.id)
            if url:
                descriptor.url = url
                descriptor.format = format
    return descriptors
