"""
Randomized post-processing that roughens LLM output into more human-looking prose.

Three stages run in a fixed order:
1. add_imperfections: occasional whole-word typos
2. add_human_texture: synonym swaps, contractions and filler phrases
3. split_long_sentences: breaks up or truncates run-on sentences

Each stage is a pure ``(text, rng) -> text`` function. Randomness comes only
from the injected ``random.Random``; a branch with probability ``p`` fires when
``rng.random() < p``. Seed the rng to get reproducible output.
"""
import random
import re
from typing import Callable, List, Optional, Sequence, Tuple

Stage = Callable[[str, random.Random], str]

# Stage A: imperfection injection
IMPERFECTION_PROBABILITY = 0.4
TYPO_PROBABILITY = 0.3
TYPOS: List[Tuple[str, str]] = [
    ("the", "teh"),
    ("and", "adn"),
    ("to", "too"),
    ("it's", "its"),
]

# Stage B: lexical variation
VARIATIONS: List[Tuple[re.Pattern, Sequence[str]]] = [
    (re.compile(r"\bHowever\b"), ["That said", "But", "On the flip side", "Though"]),
    (re.compile(r"\bMoreover\b"), ["Also", "Plus", "And yeah", "What's more"]),
    (re.compile(r"\bin order to\b"), ["to", "so I can", "just to"]),
    (re.compile(r"\bIt is important to\b"), ["You should", "It's key to", "I'd say it's worth"]),
    (re.compile(r"\butilize\b"), ["use", "tap into", "go with", "make use of"]),
    (re.compile(r"\bthe\b"), ["that", "the", "a"]),
]
CONTRACTIONS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"\bdo not\b"), "don't"),
    (re.compile(r"\bis not\b"), "isn't"),
    (re.compile(r"\bI am\b"), "I'm"),
]
FILLER_PROBABILITY = 0.4
FILLER_SENTENCE_PROBABILITY = 0.2
FILLERS = ["you know,", "like,", "honestly,", "by the way,"]
FILLER_SEPARATOR = ". "

# Stage C: sentence-length normalization
MAX_SENTENCE_LENGTH = 120
SPLIT_SEARCH_LIMIT = 80
MIN_SPLIT_INDEX = 20
TRUNCATE_LENGTH = 90
ELLIPSIS = "..."
_SENTENCE_BOUNDARY = re.compile(r"(?<=\.)\s+")

_TYPO_PATTERNS = [(re.compile(r"\b" + re.escape(source) + r"\b"), typo) for source, typo in TYPOS]


def add_imperfections(text: str, rng: random.Random) -> str:
    """
    Inject patchy spelling mistakes.

    Most outputs stay clean. When the stage fires, every typo rule gets its own
    coin flip, so zero, some or all of them may apply. A rule that applies
    rewrites every whole-word, case-sensitive occurrence.

    Args:
        text: Input text
        rng: Random source

    Returns:
        Text with typos, or the input unchanged
    """
    if rng.random() >= IMPERFECTION_PROBABILITY:
        return text

    result = text
    for pattern, typo in _TYPO_PATTERNS:
        if rng.random() < TYPO_PROBABILITY:
            result = pattern.sub(typo, result)
    return result


def _insert_fillers(text: str, rng: random.Random) -> str:
    fragments = text.split(FILLER_SEPARATOR)
    for i, fragment in enumerate(fragments):
        if rng.random() < FILLER_SENTENCE_PROBABILITY:
            fragments[i] = f"{rng.choice(FILLERS)} {fragment}"
    return FILLER_SEPARATOR.join(fragments)


def add_human_texture(text: str, rng: random.Random) -> str:
    """
    Swap stilted phrasing for casual alternatives.

    Each match of a variation pattern draws its own replacement, so repeated
    words can come out differently. Contractions always apply. Filler phrases
    are inserted last, on the already-substituted text.

    Args:
        text: Input text
        rng: Random source

    Returns:
        Text with lexical variation applied
    """
    result = text
    for pattern, replacements in VARIATIONS:
        result = pattern.sub(lambda _match: rng.choice(replacements), result)

    for pattern, contraction in CONTRACTIONS:
        result = pattern.sub(contraction, result)

    if rng.random() < FILLER_PROBABILITY:
        result = _insert_fillers(result, rng)
    return result


def _normalize_sentence(sentence: str) -> str:
    if len(sentence) <= MAX_SENTENCE_LENGTH:
        return sentence

    comma = sentence.rfind(",", 0, SPLIT_SEARCH_LIMIT + 1)
    if comma > MIN_SPLIT_INDEX:
        return sentence[:comma] + ". " + sentence[comma + 1:].strip()
    return sentence[:TRUNCATE_LENGTH] + ELLIPSIS


def split_long_sentences(text: str, rng: Optional[random.Random] = None) -> str:
    """
    Cap run-on sentences.

    Sentences over 120 characters are split at the last comma within the first
    80 characters, or hard-truncated to 90 characters plus an ellipsis when no
    usable comma exists. No grammatical repair is attempted.

    Args:
        text: Input text
        rng: Unused; accepted so every stage shares one signature

    Returns:
        Text with long sentences split or truncated
    """
    return " ".join(_normalize_sentence(s) for s in _SENTENCE_BOUNDARY.split(text))


HUMANIZATION_STAGES: List[Stage] = [
    add_imperfections,
    add_human_texture,
    split_long_sentences,
]


def humanize(
    text: str,
    rng: Optional[random.Random] = None,
    stages: Sequence[Stage] = HUMANIZATION_STAGES,
) -> str:
    """
    Run text through every humanization stage, left to right.

    Args:
        text: Raw completion text
        rng: Random source; a fresh unseeded one is used when omitted
        stages: Stage functions to apply

    Returns:
        Humanized text
    """
    if rng is None:
        rng = random.Random()

    result = text
    for stage in stages:
        result = stage(result, rng)
    return result
