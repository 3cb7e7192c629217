"""
Key-concept extraction for carousel slides.

Concepts come from an LLM when one is configured. Without an LLM, or when
the LLM call or its JSON fails, a heuristic sentence scorer picks
representative sentences spread across the transcript instead, at zero LLM
cost.
"""
import json
import math
import re
from typing import List, NamedTuple, Optional

from loguru import logger

from carousel.core.constants import ConceptConfig
from carousel.core.exceptions import ConceptExtractionError
from carousel.core.prompts import ConceptPrompts
from carousel.core.providers.llm_provider import LLMMessage, LLMProvider
from carousel.models.carousel import Concept, RawConceptList
from carousel.models.enums import LLMRole
from carousel.models.transcript import normalize_text

KEY_PHRASES = (
    "important", "key", "main", "essential", "critical",
    "remember", "note", "tip", "secret", "strategy",
    "first", "second", "third", "finally", "conclusion",
    "best", "top", "must", "should", "need",
    "success", "growth", "improve", "learn", "discover",
)
ACTION_WORDS = ("do", "make", "create", "build", "start", "begin", "try", "use")
TITLE_EMOJIS = ("💡", "🎯", "✨", "🚀", "💪", "🔥", "⭐", "📌", "🎨", "💎")

INTRO_EMOJI = "🎬"
OUTRO_TITLE = "🎯 Key Takeaway"

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_CODE_FENCE = re.compile(r"```(?:json)?\s*")
_DIGIT = re.compile(r"\d")


class ScoredSentence(NamedTuple):
    text: str
    score: float
    position: float


def split_into_sentences(text: str) -> List[str]:
    return [
        s.strip()
        for s in _SENTENCE_BOUNDARY.split(text)
        if len(s) > ConceptConfig.MIN_SENTENCE_LENGTH
    ]


def score_sentence(sentence: str) -> float:
    """
    Importance score of a sentence.

    Medium-length sentences, key phrases, action words and numbers all
    raise the score. Matching is by substring, so "do" also counts in
    "don't".
    """
    score = 0.0

    word_count = len(sentence.split())
    if 8 <= word_count <= 25:
        score += 2

    lower = sentence.lower()
    score += sum(1 for phrase in KEY_PHRASES if phrase in lower)
    score += sum(0.5 for word in ACTION_WORDS if word in lower)

    if _DIGIT.search(sentence):
        score += 1

    return score


def make_title(text: str, index: int) -> str:
    """Catchy title: first six words, capitalized, with a rotating emoji."""
    title = " ".join(text.split()[:6])
    title = re.sub(r"[.!?,;:]$", "", title)
    title = title[:1].upper() + title[1:]
    return f"{TITLE_EMOJIS[index % len(TITLE_EMOJIS)]} {title}"


def truncate(text: str, limit: int = ConceptConfig.MAX_CONTENT_CHARS) -> str:
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def parse_llm_concepts(content: str) -> RawConceptList:
    """
    Parse the model's JSON answer, tolerating markdown code fences.

    Raises:
        ValueError: If the answer is not valid JSON of the expected shape.
    """
    cleaned = _CODE_FENCE.sub("", content).strip()
    return RawConceptList.model_validate(json.loads(cleaned))


class ConceptExtractor:
    """
    Reduces a transcript to an ordered list of slide concepts.

    Example:
        extractor = ConceptExtractor(llm_provider=None)
        concepts = await extractor.extract(transcript.text, slide_count=5)
    """

    def __init__(self, llm_provider: Optional[LLMProvider] = None):
        self.llm_provider = llm_provider

    async def extract(self, text: str, slide_count: int = ConceptConfig.DEFAULT_SLIDE_COUNT) -> List[Concept]:
        """
        Extract concepts, preferring the LLM and falling back to heuristics.

        Raises:
            ConceptExtractionError: If heuristic extraction is needed and the
                text has too few sentences.
        """
        if self.llm_provider is None:
            logger.info("No LLM provider configured, using heuristic extraction")
            return self.extract_heuristic(text, slide_count)

        try:
            concepts = await self._extract_with_llm(text, slide_count)
            logger.info(f"AI extracted {len(concepts)} coherent concepts")
            return concepts
        except Exception as e:
            logger.warning(f"AI processing failed, using heuristic fallback: {e}")
            return self.extract_heuristic(text, slide_count)

    async def _extract_with_llm(self, text: str, slide_count: int) -> List[Concept]:
        messages = [
            LLMMessage(role=LLMRole.SYSTEM, content=ConceptPrompts.SYSTEM),
            LLMMessage(
                role=LLMRole.USER,
                content=ConceptPrompts.USER.format(
                    slide_count=slide_count,
                    transcript=text[: ConceptConfig.MAX_TRANSCRIPT_CHARS],
                ),
            ),
        ]
        response = await self.llm_provider.generate_text(
            messages=messages,
            temperature=ConceptConfig.LLM_TEMPERATURE,
            json_mode=True,
        )
        raw = parse_llm_concepts(response.content).concepts[:slide_count]

        return [
            Concept(
                slide_number=index + 1,
                title=item.title.strip(),
                content=item.content.strip(),
                position=index / len(raw),
                is_intro=index == 0,
                is_outro=index == len(raw) - 1,
                ai_generated=True,
            )
            for index, item in enumerate(raw)
        ]

    def extract_heuristic(self, text: str, slide_count: int = ConceptConfig.DEFAULT_SLIDE_COUNT) -> List[Concept]:
        sentences = split_into_sentences(normalize_text([text]))
        if len(sentences) < ConceptConfig.MIN_SENTENCES:
            raise ConceptExtractionError("Transcript too short to extract meaningful concepts")

        total = len(sentences)
        scored = [
            ScoredSentence(text=s, score=score_sentence(s), position=i / total)
            for i, s in enumerate(sentences)
        ]

        # Best sentences first, at most one per tenth of the transcript
        target = min(slide_count, math.ceil(total / 3))
        selected: List[ScoredSentence] = []
        used_deciles = set()
        for candidate in sorted(scored, key=lambda s: s.score, reverse=True):
            if len(selected) >= target:
                break
            decile = int(candidate.position * 10)
            if decile not in used_deciles:
                selected.append(candidate)
                used_deciles.add(decile)

        selected.sort(key=lambda s: s.position)

        last = len(selected) - 1
        concepts = [
            Concept(
                slide_number=index + 1,
                title=make_title(item.text, index),
                content=truncate(item.text),
                position=item.position,
                is_intro=index == 0,
                is_outro=index == last,
            )
            for index, item in enumerate(selected)
        ]

        concepts[0].title = f"{INTRO_EMOJI} {concepts[0].title.split(' ', 1)[-1]}"
        concepts[-1].title = OUTRO_TITLE
        return concepts
