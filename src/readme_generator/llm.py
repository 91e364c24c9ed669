import logging
from functools import lru_cache

from openai import AsyncOpenAI

from readme_generator import config

logger = logging.getLogger(__name__)


class LLMError(Exception):
    def __init__(self, message: str, status_code: int = 502):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@lru_cache
def _get_client(api_key: str, base_url: str) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)


async def generate_readme(prompt: str, model: str) -> str:
    cfg = config.get_config()
    if not cfg.llm.gemini_api_key:
        raise LLMError("GEMINI_API_KEY not configured on server", status_code=503)

    client = _get_client(cfg.llm.gemini_api_key, cfg.llm.gemini_base_url)
    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            timeout=cfg.llm.request_timeout,
        )
    except Exception as exc:
        logger.error(f"Gemini request failed: {exc}")
        raise LLMError(f"Gemini request failed: {exc}") from exc

    text = response.choices[0].message.content
    if not text:
        raise LLMError("Gemini request failed: empty response")
    return text
