import io
import zipfile

import pytest

from readme_generator import config, models

SMALL_REPO = {
    "README.md": "# My Project\n\nA sample project for testing.",
    "package.json": '{"name": "my-project", "dependencies": {"hono": "^4"}}',
    "src/index.ts": "import { Hono } from 'hono'\nexport const app = new Hono()\n",
    "src/utils.ts": "export const helper = () => 42\n",
    "node_modules/x.js": "module.exports = {}\n",
}

SAMPLE_FILES = [
    models.FileEntry(path="src/utils.ts", size=31, content="export const helper = () => 42\n"),
    models.FileEntry(path="README.md", size=44, content="# My Project\n\nA sample project for testing."),
    models.FileEntry(path="assets/logo.png", size=2048, content=None),
    models.FileEntry(path="package.json", size=20, content='{"name": "my-project"}'),
    models.FileEntry(path="Dockerfile", size=18, content="FROM oven/bun:1\n"),
]


def make_zip(files: dict[str, bytes | str], root: str | None = "my-project-main") -> bytes:
    """Build an in-memory zip the way GitHub's codeload exports look."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        if root:
            zf.writestr(f"{root}/", b"")
        dirs_written = set()
        for path, content in files.items():
            full = f"{root}/{path}" if root else path
            parent = full.rsplit("/", 1)[0] if "/" in full else None
            if parent and parent != root and parent not in dirs_written:
                zf.writestr(f"{parent}/", b"")
                dirs_written.add(parent)
            zf.writestr(full, content)
    return buf.getvalue()


@pytest.fixture
def small_zip():
    return make_zip(SMALL_REPO)


@pytest.fixture
def sample_files():
    return list(SAMPLE_FILES)


@pytest.fixture(autouse=True)
def app_config(monkeypatch, tmp_path):
    monkeypatch.setenv("HISTORY_PATH", str(tmp_path / "history.json"))
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    config.get_config.cache_clear()
    yield
    config.get_config.cache_clear()
