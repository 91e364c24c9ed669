from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from readme_generator import config


class FileEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    size: int = Field(ge=0)
    content: str | None = None


class SelectionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_file_size: int = Field(config.DEFAULT_MAX_FILE_SIZE, gt=0)
    max_files: int = Field(config.DEFAULT_MAX_FILES, gt=0)
    include_patterns: tuple[str, ...] = ()
    # None selects the default exclude set; an empty tuple disables exclusion
    exclude_patterns: tuple[str, ...] | None = None

    @property
    def effective_excludes(self) -> tuple[str, ...]:
        if self.exclude_patterns is None:
            return config.DEFAULT_EXCLUDE_PATTERNS
        return self.exclude_patterns


class RepoSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    repo: str
    file_count: int
    total_size: int
    files: list[FileEntry]


class FetchRepoRequest(BaseModel):
    url: str
    max_file_size: int = Field(config.DEFAULT_MAX_FILE_SIZE, gt=0, le=config.MAX_FILE_SIZE_LIMIT)
    max_files: int = Field(config.DEFAULT_MAX_FILES, gt=0, le=config.MAX_FILES_LIMIT)
    include_patterns: list[str] | None = None
    exclude_patterns: list[str] | None = None

    def selection(self) -> SelectionConfig:
        return SelectionConfig(
            max_file_size=self.max_file_size,
            max_files=self.max_files,
            include_patterns=tuple(self.include_patterns or ()),
            exclude_patterns=None if self.exclude_patterns is None else tuple(self.exclude_patterns),
        )


class GenerateReadmeRequest(BaseModel):
    repo: str
    files: list[FileEntry] = Field(min_length=1)
    max_chars: int = Field(config.DEFAULT_MAX_CHARS, gt=0, le=config.MAX_CHARS_LIMIT)
    model: str | None = None
    include_prompt: bool = False


class ReadmeResponse(BaseModel):
    repo: str
    readme: str
    used_chars: int
    file_sample_count: int
    included_files: list[str]
    model: str
    prompt: str | None = None


class ReadmeGeneration(BaseModel):
    id: str
    created_at: int
    model: str | None = None
    used_chars: int | None = None
    file_sample_count: int | None = None
    included_files: list[str] = Field(default_factory=list)
    prompt: str | None = None
    readme: str


class StoredSnapshot(RepoSnapshot):
    url: str | None = None
    fetched_at: int


class RepoHistoryEntry(BaseModel):
    repo: str
    url: str | None = None
    snapshot: StoredSnapshot
    generations: list[ReadmeGeneration] = Field(default_factory=list)
    edited_readme: str | None = None
    updated_at: int


class EditedReadmeRequest(BaseModel):
    readme: str


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
