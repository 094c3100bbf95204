"""
Anecdote rewriter: LLM rewrite gateway with randomized humanization.
"""

__version__ = "1.0.0"
