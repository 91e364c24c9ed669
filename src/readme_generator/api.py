import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from readme_generator import archive, core, github, llm, models, patterns

logger = logging.getLogger(__name__)


app = FastAPI(title="GitHub README Generator")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=models.ErrorResponse(message=message).model_dump(),
    )


def _error_responses(*status_codes: int) -> dict[int, dict]:
    return {code: {"model": models.ErrorResponse} for code in status_codes}


@app.exception_handler(github.GitHubError)
async def github_error_handler(request: Request, exc: github.GitHubError) -> JSONResponse:
    logger.error(f"GitHub error: {exc}")
    return _error(exc.status_code, exc.message)


@app.exception_handler(archive.ArchiveError)
async def archive_error_handler(request: Request, exc: archive.ArchiveError) -> JSONResponse:
    logger.error(f"Archive error: {exc}")
    return _error(422, exc.message)


@app.exception_handler(patterns.PatternError)
async def pattern_error_handler(request: Request, exc: patterns.PatternError) -> JSONResponse:
    return _error(400, exc.message)


@app.exception_handler(llm.LLMError)
async def llm_error_handler(request: Request, exc: llm.LLMError) -> JSONResponse:
    logger.error(f"LLM error: {exc}")
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
    )
    return _error(422, messages)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error")
    return _error(500, "Internal server error")


@app.get("/")
async def health_check():
    return {
        "status": "OK",
        "service": "GitHub README Generator",
        "usage": "POST /fetch-repo with {\"url\": \"https://github.com/owner/repo\"}, "
        "then POST /generate-readme with the returned repo and files",
        "docs": "/docs",
    }


@app.post(
    "/fetch-repo",
    response_model=models.RepoSnapshot,
    responses=_error_responses(400, 404, 422, 502),
)
async def fetch_repo(request: models.FetchRepoRequest) -> models.RepoSnapshot:
    return await core.fetch_repo(request)


@app.post(
    "/generate-readme",
    response_model=models.ReadmeResponse,
    response_model_exclude_none=True,
    responses=_error_responses(422, 502, 503),
)
async def generate_readme(request: models.GenerateReadmeRequest) -> models.ReadmeResponse:
    return await core.generate_readme(request)


@app.get("/history", response_model=list[models.RepoHistoryEntry])
async def list_history() -> list[models.RepoHistoryEntry]:
    return core.get_history_store().list_entries()


@app.delete("/history")
async def clear_history():
    core.get_history_store().clear()
    return {"status": "ok"}


@app.get(
    "/history/{owner}/{repo}",
    response_model=models.RepoHistoryEntry,
    responses=_error_responses(404),
)
async def get_history_entry(owner: str, repo: str):
    entry = core.get_history_store().get_entry(f"{owner}/{repo}")
    if entry is None:
        return _error(404, f"No history for {owner}/{repo}")
    return entry


@app.put(
    "/history/{owner}/{repo}/readme",
    response_model=models.RepoHistoryEntry,
    responses=_error_responses(404),
)
async def save_edited_readme(owner: str, repo: str, request: models.EditedReadmeRequest):
    entry = core.get_history_store().save_edited_readme(f"{owner}/{repo}", request.readme)
    if entry is None:
        return _error(404, f"No history for {owner}/{repo}")
    return entry


@app.delete("/history/{owner}/{repo}", responses=_error_responses(404))
async def remove_history_entry(owner: str, repo: str):
    if not core.get_history_store().remove_entry(f"{owner}/{repo}"):
        return _error(404, f"No history for {owner}/{repo}")
    return {"status": "ok"}
