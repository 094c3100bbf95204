"""
Prompt templates for the LLM rewrite step.

The rewrite prompt asks the model to:
- Rewrite text so it reads naturally
- Weave in two personal anecdotes
- Match a requested tone while preserving facts
"""
from rewriter.prompts.rewrite_prompts import build_rewrite_prompt

__all__ = ["build_rewrite_prompt"]
