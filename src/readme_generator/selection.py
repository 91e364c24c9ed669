import logging
from collections.abc import Iterable

from readme_generator import models, patterns
from readme_generator.archive import ArchiveMember

logger = logging.getLogger(__name__)


def decode_text(raw: bytes) -> str | None:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


def compile_filters(
    selection: models.SelectionConfig,
) -> tuple[list[patterns.PathPattern], list[patterns.PathPattern]]:
    excludes = patterns.compile_patterns(selection.effective_excludes)
    includes = patterns.compile_patterns(selection.include_patterns)
    return excludes, includes


def select_files(
    members: Iterable[ArchiveMember],
    selection: models.SelectionConfig,
) -> list[models.FileEntry]:
    """Pick files in archive order, stopping once ``max_files`` are accepted.

    Exclude, include and size checks run before the count cap, so a file
    rejected by a filter never uses up a slot.
    """
    excludes, includes = compile_filters(selection)

    files: list[models.FileEntry] = []
    for member in members:
        if member.is_dir or not member.path:
            continue

        if patterns.matches_any(excludes, member.path):
            continue

        if includes and not patterns.matches_any(includes, member.path):
            continue

        raw = member.read_bytes(limit=selection.max_file_size + 1)
        size = len(raw) if raw is not None else 0
        if size > selection.max_file_size:
            continue

        content = decode_text(raw) if raw is not None else None
        files.append(models.FileEntry(path=member.path, size=size, content=content))

        if len(files) == selection.max_files:
            logger.info(f"Reached max_files={selection.max_files}, ignoring remaining entries")
            break

    return files


def build_snapshot(repo: str, files: list[models.FileEntry]) -> models.RepoSnapshot:
    return models.RepoSnapshot(
        repo=repo,
        file_count=len(files),
        total_size=sum(f.size for f in files),
        files=files,
    )
