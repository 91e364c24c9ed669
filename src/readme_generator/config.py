from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    gemini_api_key: str | None = None
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    default_model: str = "gemini-2.0-flash"
    request_timeout: float = 120.0


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    llm: LLMConfig = Field(default_factory=LLMConfig)
    github_token: str | None = None
    history_path: str = ".readme_history.json"


@lru_cache
def get_config() -> Config:
    return Config()


# Selection defaults and request bounds
DEFAULT_MAX_FILE_SIZE = 120_000  # bytes per file
MAX_FILE_SIZE_LIMIT = 500_000
DEFAULT_MAX_FILES = 600
MAX_FILES_LIMIT = 3000

# Packing budget
DEFAULT_MAX_CHARS = 120_000
MAX_CHARS_LIMIT = 200_000

DEFAULT_EXCLUDE_PATTERNS = (
    "node_modules",
    "dist",
    "build",
    r"\.git/",
    r"\.cache",
)

# Files that tell the model the most about a project
PRIORITY_PATTERNS = (
    r"readme",
    r"package\.json$",
    r"tsconfig\.json$",
    r"biome\.json$",
    r"pyproject\.toml$",
    r"setup\.py$",
    r"cargo\.toml$",
    r"go\.mod$",
    r"src/index\.[tj]sx?$",
    r"src/main\.[tj]sx?$",
    r"dockerfile",
)

ARCHIVE_BRANCHES = ("main", "master")
