README_SYSTEM_PROMPT = """\
You are an AI that crafts high-quality, comprehensive README.md files for GitHub repositories.
Generate a professional README in GitHub-flavored Markdown for the repository {repo}.
Emphasize: concise overview, key features, tech stack, setup instructions, usage examples, \
architecture summary, contribution guidelines, and license placeholder.
Infer missing context cautiously; clearly mark assumptions. Avoid hallucinations. \
Prefer facts from the provided files. If something is unknown, state that it is unknown. \
Provide command examples using Bun where applicable if bun.lock or bunfig appears.\
"""

FILES_SECTION_HEADER = "\n\nRepository files (excerpts):"


def build_readme_prompt(repo: str, packed_text: str, max_chars: int) -> str:
    # Clamp only the packed section; the preamble is never cut
    return (
        README_SYSTEM_PROMPT.format(repo=repo)
        + FILES_SECTION_HEADER
        + packed_text[:max_chars]
    )
