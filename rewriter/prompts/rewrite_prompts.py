"""
Structured prompt template for the humanizing rewrite.

All embedded values are expected to be sanitized already. The template does no
escaping of its own, so keeping instructions intact is best-effort only.
"""

REWRITE_PROMPT_HEADER = """You are a creative human editor. Rewrite the text to:
- Sound natural and human.
- Include these personal details subtly: "{anecdote1}", "{anecdote2}".
- Match the tone: {tone_hint}."""

EXTRA_DETAIL_LINE = """
- Include additional context if provided: "{extra_detail}"."""

REWRITE_PROMPT_FOOTER = """
- Preserve all facts.
- Output only the rewritten text.

Text:
-----
{text}
-----
"""


def build_rewrite_prompt(
    text: str,
    anecdote1: str,
    anecdote2: str,
    tone_hint: str,
    extra_detail: str = "",
) -> str:
    """
    Build the rewrite instruction for the completion service.

    Args:
        text: Source text to rewrite
        anecdote1: First personal detail, embedded verbatim
        anecdote2: Second personal detail, embedded verbatim
        tone_hint: Desired tone description
        extra_detail: Optional additional context (line omitted when empty)

    Returns:
        Formatted prompt string
    """
    prompt = REWRITE_PROMPT_HEADER.format(
        anecdote1=anecdote1,
        anecdote2=anecdote2,
        tone_hint=tone_hint,
    )
    if extra_detail:
        prompt += EXTRA_DETAIL_LINE.format(extra_detail=extra_detail)
    prompt += REWRITE_PROMPT_FOOTER.format(text=text)
    return prompt


if __name__ == "__main__":
    print(build_rewrite_prompt(
        "However, it is important to utilize resources.",
        "grew up in Ohio",
        "loves hiking",
        "casual",
    ))
