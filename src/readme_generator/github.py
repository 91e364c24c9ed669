import logging
import re
from urllib.parse import urlparse

import httpx

from readme_generator import config

logger = logging.getLogger(__name__)

CODELOAD_URL = "https://codeload.github.com/{owner}/{repo}/zip/refs/heads/{branch}"


class GitHubError(Exception):
    def __init__(self, message: str, status_code: int = 502):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def parse_github_url(url: str) -> tuple[str, str]:
    url = url.strip().rstrip("/")
    if url.endswith(".git"):
        url = url[:-4]

    parsed = urlparse(url)
    if parsed.hostname not in ("github.com", "www.github.com"):
        raise GitHubError("Not a GitHub URL", status_code=400)

    parts = [p for p in parsed.path.strip("/").split("/") if p]
    if len(parts) < 2:
        raise GitHubError("Invalid GitHub repository URL (expected github.com/owner/repo)", status_code=400)

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[:-4]
    if not re.match(r"^[\w.\-]+$", owner) or not re.match(r"^[\w.\-]+$", repo):
        raise GitHubError("Invalid owner or repo name", status_code=400)

    return owner, repo


def _make_headers(token: str | None) -> dict[str, str]:
    headers = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def _fetch_archive_for(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    branch: str,
    token: str | None,
) -> bytes | None:
    url = CODELOAD_URL.format(owner=owner, repo=repo, branch=branch)
    try:
        resp = await client.get(url, headers=_make_headers(token), follow_redirects=True)
    except httpx.HTTPError as exc:
        raise GitHubError(f"Failed to connect to GitHub: {exc}") from exc

    if resp.status_code != 200:
        logger.info(f"No archive for {owner}/{repo}@{branch} ({resp.status_code})")
        return None
    return resp.content


async def download_archive(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    token: str | None = None,
    branches: tuple[str, ...] = config.ARCHIVE_BRANCHES,
) -> bytes:
    for branch in branches:
        data = await _fetch_archive_for(client, owner, repo, branch, token)
        if data is not None:
            logger.info(f"Downloaded {owner}/{repo}@{branch}: {len(data)} bytes")
            return data

    tried = " & ".join(branches)
    raise GitHubError(f"Failed to download repo archive (tried {tried})", status_code=404)
