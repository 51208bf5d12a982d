"""Orchestration routing.

Decides whether a chat message warrants a multi-agent run at all, and
guesses the deliverable type from keywords. Simple questions go to a single
agent; deliverable requests and multi-part asks go to the orchestrator.
"""

import re
from typing import Optional

from orchestra.core.schemas import DeliverableType

SIMPLE_QUESTION_PATTERNS = [
    re.compile(r"^what does the bible say about", re.IGNORECASE),
    re.compile(r"^who (was|is)", re.IGNORECASE),
    re.compile(r"^what (is|are|was|were)", re.IGNORECASE),
    re.compile(r"^when (did|was|is)", re.IGNORECASE),
    re.compile(r"^where (is|was|did)", re.IGNORECASE),
    re.compile(r"^how (do|does|did|can|should)", re.IGNORECASE),
    re.compile(r"^why (do|does|did|is|are)", re.IGNORECASE),
    re.compile(r"^explain", re.IGNORECASE),
    re.compile(r"^tell me about", re.IGNORECASE),
    re.compile(r"^can you help me understand", re.IGNORECASE),
    re.compile(r"^help me understand", re.IGNORECASE),
]

ORCHESTRATION_KEYWORDS = [
    "presentation", "slides", "slide deck", "pitch deck", "powerpoint",
    "essay", "article", "blog post", "write a",
    "sermon", "devotional", "bible study",
    "course", "curriculum", "lesson plan",
    "create a", "build a", "design a",
    "comprehensive", "detailed", "complete",
]

ORCHESTRATED_AGENT_IDS = {"presentation-agent", "essay-writer", "sermon-specialist"}

# The deck must be what the caller asks for, not a topic they mention:
# between the verb and the deck noun only determiners and size or tool words
_DECK_NOUN = r"(?:presentation|slides|slide deck|slideshow|powerpoint|pitch deck)"
_DECK_MODIFIER = (
    r"(?:a|an|the|some|few|me|us|my|our|short|brief|quick|simple|new|full|complete|"
    r"powerpoint|keynote|google|\d+(?:-\w+)?)"
)

EXPLICIT_PRESENTATION_PATTERNS = [
    re.compile(
        r"\b(?:create|make|build|generate|prepare|design|draft|put together)\s+"
        rf"(?:{_DECK_MODIFIER}\s+){{0,4}}{_DECK_NOUN}\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\bi(?:'d| would)?\s+(?:need|want|like)\s+"
        rf"(?:{_DECK_MODIFIER}\s+){{0,3}}{_DECK_NOUN}\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:turn|convert|transform)\b[\w\s,'-]{0,80}?\binto\s+"
        rf"(?:{_DECK_MODIFIER}\s+){{0,3}}{_DECK_NOUN}\b",
        re.IGNORECASE,
    ),
]

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def should_orchestrate(content: str, agent_id: Optional[str] = None) -> bool:
    """True if the message should run through the multi-agent pipeline."""
    stripped = content.strip()
    if any(pattern.search(stripped) for pattern in SIMPLE_QUESTION_PATTERNS):
        return False

    lower = content.lower()
    if any(keyword in lower for keyword in ORCHESTRATION_KEYWORDS):
        return True

    if agent_id and agent_id in ORCHESTRATED_AGENT_IDS:
        return True

    # multi-part requests
    sentences = [s for s in _SENTENCE_SPLIT.split(content) if s.strip()]
    return len(sentences) > 2


def detect_deliverable_type(content: str) -> DeliverableType:
    """Keyword guess at the deliverable a message is asking for."""
    lower = content.lower()

    if any(word in lower for word in ("presentation", "slides", "slide deck", "pitch deck", "powerpoint")):
        return DeliverableType.PRESENTATION
    if "essay" in lower or "write about" in lower:
        return DeliverableType.ESSAY
    if "article" in lower or "blog" in lower:
        return DeliverableType.ARTICLE
    if "sermon" in lower or "devotional" in lower:
        return DeliverableType.SERMON
    if "course" in lower or "curriculum" in lower:
        return DeliverableType.COURSE
    return DeliverableType.GENERAL


def is_explicit_presentation_request(text: str) -> bool:
    """True only when the text explicitly asks for a presentation or slides."""
    return any(pattern.search(text) for pattern in EXPLICIT_PRESENTATION_PATTERNS)
