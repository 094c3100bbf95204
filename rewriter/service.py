import logging
import random
import time
from typing import Optional

from rewriter.completion import CompletionClient
from rewriter.config import Settings, get_settings
from rewriter.errors import ValidationError
from rewriter.humanization import humanize
from rewriter.prompts import build_rewrite_prompt
from rewriter.sanitizer import clean_input
from rewriter.schemas import RewriteRequest, RewriteResponse

logger = logging.getLogger(__name__)

SUGGESTIONS = (
    "Add a personal opinion on one key point.",
    "Insert a real-life example from your experience.",
    "Vary sentence starters for better flow.",
    "Include a question or rhetorical aside.",
    "Check and adjust any awkward phrasing manually.",
)

DISCLOSURE = (
    "This text was refined with an automated assistant. "
    "Review and add your own edits for authenticity."
)


def count_words(text: str) -> int:
    return len(text.split())


def assemble_response(rewritten: str) -> RewriteResponse:
    """Package final text with the fixed suggestions and disclosure."""
    return RewriteResponse(
        rewritten=rewritten,
        suggestions=list(SUGGESTIONS),
        disclosure=DISCLOSURE,
        word_count=count_words(rewritten),
    )


class RewriteService:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        completion_client: Optional[CompletionClient] = None,
    ):
        self.settings = settings or get_settings()
        self.completion_client = completion_client or CompletionClient(self.settings)

    def _rng(self) -> random.Random:
        # Fresh per request so concurrent rewrites never share state
        return random.Random(self.settings.humanization_seed)

    async def rewrite(self, request: RewriteRequest) -> RewriteResponse:
        """
        Rewrite ``request.text`` with the completion service and humanize the result.

        Raises:
            RewriteError: Any failure; nothing partial is returned
        """
        limit = self.settings.max_field_length
        text = clean_input(request.text, limit)
        anecdote1 = clean_input(request.anecdote1, limit)
        anecdote2 = clean_input(request.anecdote2, limit)
        tone_hint = clean_input(request.tone_hint, limit) or self.settings.default_tone
        extra_detail = clean_input(request.extra_detail, limit)

        if not text or not anecdote1 or not anecdote2:
            raise ValidationError("Text and two personal details are required")

        prompt = build_rewrite_prompt(text, anecdote1, anecdote2, tone_hint, extra_detail)
        logger.debug("Built rewrite prompt (%d chars)", len(prompt))

        completion = await self.completion_client.complete(prompt)

        started = time.perf_counter()
        rewritten = completion.text
        if self.settings.enable_humanization:
            rewritten = humanize(rewritten, self._rng())
        logger.info(
            "Rewrote %d chars into %d chars (humanized in %.3fs, finish_reason=%s)",
            len(text), len(rewritten), time.perf_counter() - started, completion.finish_reason
        )

        return assemble_response(rewritten)


rewrite_service = RewriteService()
