import io
import logging
import zipfile
import zlib
from typing import NamedTuple

logger = logging.getLogger(__name__)

# What zipfile raises on damaged headers, names and streams
_CORRUPT_ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    NotImplementedError,
    ValueError,
    IndexError,
    EOFError,
    OSError,
)


class ArchiveError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ArchiveMember(NamedTuple):
    path: str
    is_dir: bool
    info: zipfile.ZipInfo
    archive: zipfile.ZipFile

    def read_bytes(self, limit: int | None = None) -> bytes | None:
        """Read the member's raw bytes, stopping after ``limit`` bytes when given."""
        try:
            with self.archive.open(self.info) as fh:
                return fh.read(-1 if limit is None else limit)
        except (*_CORRUPT_ARCHIVE_ERRORS, RuntimeError) as exc:
            logger.warning(f"Could not read {self.info.filename}: {exc}")
            return None


def common_root(names: list[str]) -> str | None:
    """Return the top-level directory shared by every name, if there is one.

    GitHub archive exports wrap the tree in a single ``<repo>-<branch>/``
    directory; local zips usually don't.
    """
    if not names or any("/" not in name for name in names):
        return None
    roots = {name.split("/", 1)[0] for name in names}
    if len(roots) != 1:
        return None
    return roots.pop()


def strip_root(name: str, root: str | None) -> str:
    if root is None:
        return name
    return name[len(root) + 1:]


def extract_members(data: bytes) -> list[ArchiveMember]:
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
        infos = archive.infolist()
        root = common_root([info.filename for info in infos])

        members = []
        for info in infos:
            if info.is_dir():
                continue
            path = strip_root(info.filename, root)
            if not path:
                continue
            members.append(ArchiveMember(path, False, info, archive))
    except _CORRUPT_ARCHIVE_ERRORS as exc:
        raise ArchiveError(f"Could not open repository archive: {exc}") from exc

    logger.debug(f"Archive: {len(infos)} entries, {len(members)} files, root={root!r}")
    return members
