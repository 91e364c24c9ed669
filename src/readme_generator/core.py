import asyncio
import logging
import time
import uuid

import httpx

from readme_generator import archive, config, context, github, history, llm, models, prompts, selection

logger = logging.getLogger(__name__)


def get_history_store() -> history.HistoryStore:
    return history.HistoryStore(config.get_config().history_path)


def snapshot_from_archive(
    repo: str,
    data: bytes,
    selection_config: models.SelectionConfig,
) -> models.RepoSnapshot:
    members = archive.extract_members(data)
    files = selection.select_files(members, selection_config)
    logger.info(f"Archive: {len(members)} files, {len(files)} selected")
    return selection.build_snapshot(repo, files)


async def fetch_repo(request: models.FetchRepoRequest) -> models.RepoSnapshot:
    cfg = config.get_config()
    owner, repo = github.parse_github_url(request.url)
    # Fail on bad patterns before spending a download
    selection_config = request.selection()
    selection.compile_filters(selection_config)

    logger.info(f"Fetching {owner}/{repo}")
    async with httpx.AsyncClient(timeout=60.0) as client:
        data = await github.download_archive(client, owner, repo, cfg.github_token)

    snapshot = await asyncio.to_thread(snapshot_from_archive, f"{owner}/{repo}", data, selection_config)
    logger.info(f"Snapshot {snapshot.repo}: {snapshot.file_count} files, {snapshot.total_size} bytes")

    get_history_store().upsert_snapshot(snapshot, url=request.url)
    return snapshot


def assemble_prompt(
    repo: str,
    files: list[models.FileEntry],
    max_chars: int,
) -> tuple[str, context.PackedPayload]:
    packed = context.pack_files(files, max_chars)
    prompt = prompts.build_readme_prompt(repo, packed.text, max_chars)
    return prompt, packed


async def generate_readme(request: models.GenerateReadmeRequest) -> models.ReadmeResponse:
    cfg = config.get_config()
    model = request.model or cfg.llm.default_model

    prompt, packed = assemble_prompt(request.repo, request.files, request.max_chars)
    logger.info(
        f"Sending {request.repo} to {model}: "
        f"used_chars={len(packed.text)}, included_files={len(packed.included_files)}"
    )

    t0 = time.monotonic()
    readme = await llm.generate_readme(prompt, model)
    logger.info(f"README generated in {time.monotonic() - t0:.1f}s")

    result = models.ReadmeResponse(
        repo=request.repo,
        readme=readme,
        used_chars=len(packed.text),
        file_sample_count=len(packed.included_files),
        included_files=packed.included_files,
        model=model,
        prompt=prompt if request.include_prompt else None,
    )

    generation = models.ReadmeGeneration(
        id=uuid.uuid4().hex,
        created_at=history.now_ms(),
        model=model,
        used_chars=result.used_chars,
        file_sample_count=result.file_sample_count,
        included_files=result.included_files,
        prompt=result.prompt,
        readme=readme,
    )
    if get_history_store().add_generation(request.repo, generation) is None:
        logger.debug(f"No history entry for {request.repo}, generation not recorded")

    return result
