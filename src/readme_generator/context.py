from collections.abc import Iterable, Sequence
from typing import NamedTuple

from readme_generator import config, models, patterns


class PackedPayload(NamedTuple):
    text: str
    included_files: list[str]


def priority_key(
    path: str,
    priority: Sequence[patterns.PathPattern],
) -> tuple[int, str]:
    return (0 if patterns.matches_any(priority, path) else 1, path)


def order_by_priority(
    files: Iterable[models.FileEntry],
    priority_patterns: Iterable[str] = config.PRIORITY_PATTERNS,
) -> list[models.FileEntry]:
    """Manifests, READMEs and entry points first, then everything else; by path within each group."""
    priority = patterns.compile_patterns(priority_patterns, ignore_case=True)
    return sorted(files, key=lambda f: priority_key(f.path, priority))


def format_file_block(file: models.FileEntry) -> str:
    header = f"\n\n[FILE] {file.path} ({file.size} bytes)\n"
    return f"{header}\n\n```\n{file.content}\n```\n"


def pack_files(files: Iterable[models.FileEntry], max_chars: int) -> PackedPayload:
    parts: list[str] = []
    included: list[str] = []
    used = 0

    for file in order_by_priority(files):
        if not file.content:
            continue

        block = format_file_block(file)
        # Skip rather than truncate; a smaller file later on may still fit
        if used + len(block) > max_chars:
            continue

        parts.append(block)
        included.append(file.path)
        used += len(block)

    return PackedPayload("".join(parts), included)
