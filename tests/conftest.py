"""共用 fixtures：記錄事件的 Reporter 與測試用 Figma 文件樹."""
import pytest

from figma_assets.reporter import Reporter


class RecordingReporter(Reporter):
    def __init__(self):
        self.events = []

    def duplicate_name(self, warning):
        self.events.append(("duplicate_name", warning))

    def batch_requested(self, index, total, size):
        self.events.append(("batch_requested", (index, total, size)))

    def missing_url(self, count):
        self.events.append(("missing_url", count))

    def skipped_existing(self, count):
        self.events.append(("skipped_existing", count))

    def asset_saved(self, descriptor, path):
        self.events.append(("asset_saved", descriptor.name))

    def download_failed(self, descriptor, reason):
        self.events.append(("download_failed", (descriptor.name, reason)))

    def of(self, kind):
        return [payload for k, payload in self.events if k == kind]


def node(node_id, name, children=None):
    n = {"id": node_id, "name": name, "type": "COMPONENT"}
    if children is not None:
        n["children"] = children
    return n


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def document():
    """page 'assets' 內含 icons（兩個圖示）與 component（一組 variants）兩個 frame."""
    return node("0:0", "Document", [
        node("1:0", "assets", [
            node("2:0", "icons", [
                node("3:1", "star"),
                node("3:2", "gear"),
            ]),
            node("2:1", "component", [
                node("4:0", "star", [
                    node("4:1", "filled=true, size=large"),
                    node("4:2", "filled=false, size=large"),
                ]),
            ]),
        ]),
        node("1:1", "drafts", []),
    ])
