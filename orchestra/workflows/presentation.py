"""
Presentation Workflow - slide deck creation with strict formatting rules

The presentation agents run as a narrative pipeline:
1. Presentation Orchestrator frames the transformation story
2. Story Arc Specialist structures the narrative
3. Core Message Specialist distills the central statement
4. Visual Clarity + Memorable Moments shape the slides (parallel)
5. Speaker Notes Specialist writes the delivery script
6. Formatter assembles the final deck between presentation markers
"""

from typing import Dict, List

from orchestra.workflows.base import AgentTemplate, PhaseTemplate

PRESENTATION_START = "[PRESENTATION START]"
PRESENTATION_END = "[PRESENTATION END]"

PRESENTATION_AGENT_IDS = (
    "presentation-orchestrator",
    "story-arc-specialist",
    "core-message-specialist",
    "visual-clarity",
    "memorable-moments",
    "speaker-notes-specialist",
    "formatter-agent",
)


# =============================================================================
# Phase templates
# =============================================================================

PRESENTATION_WORKFLOW: List[PhaseTemplate] = [
    PhaseTemplate(
        name="orchestration",
        parallel=False,
        agents=(
            AgentTemplate(
                "presentation-orchestrator",
                """Analyze the request: {task}

CRITICAL: You must coordinate the creation of a presentation for {audience} that follows these rules:
- Title slide: NO bullets, just title and optional subtitle
- Content slides: 3-5 bullet points per slide (3 preferred)
- Each bullet: 6-10 words ideally (complete thoughts allowed)
- One core idea per slide
- Break complex topics into multiple slides
- Suggest relevant images where they add value

Extract the core transformation story and outline how the specialists should build it.""",
            ),
        ),
    ),
    PhaseTemplate(
        name="story-structure",
        parallel=False,
        agents=(
            AgentTemplate(
                "story-arc-specialist",
                """Create the narrative structure for: {task}

Structure the presentation using the hero's journey:
1. Current Reality (What Is)
2. Vision of Possibility (What Could Be)
3. The Journey (Messy Middle)
4. Call to Action
5. Transformed Future

For each section, suggest whether a two-column layout with images would help.""",
            ),
        ),
        depends_on=("orchestration",),
    ),
    PhaseTemplate(
        name="core-message",
        parallel=False,
        agents=(
            AgentTemplate(
                "core-message-specialist",
                """Distill the core message for: {task}

Create a single powerful statement that captures the transformation.
Then outline key points: 3-5 bullets per slide, 6-10 words per bullet.
Every word must earn its place.""",
            ),
        ),
        depends_on=("story-structure",),
    ),
    PhaseTemplate(
        name="content-creation",
        parallel=True,
        agents=(
            AgentTemplate(
                "visual-clarity",
                """Design slide layouts for: {task}

DESIGN PRINCIPLES:
- One concept per slide
- 3-second readability test
- Title: 6-8 words max
- Bullets: 3-5 per slide, 6-10 words each

For each slide, specify:
[layout: standard/two-column/visual-focus/comparison]
[image: description of suggested visual if applicable]""",
            ),
            AgentTemplate(
                "memorable-moments",
                """Identify memorable moments for: {task}

Create powerful reveals, quotable statements and surprising visuals while
keeping 3-5 bullets per slide. Each moment must amplify the core message.""",
            ),
        ),
        depends_on=("core-message",),
    ),
    PhaseTemplate(
        name="speaker-notes",
        parallel=False,
        agents=(
            AgentTemplate(
                "speaker-notes-specialist",
                """Create speaker notes for the presentation about: {task}

Expand on each bullet point, add context and examples, include delivery cues,
and provide transition phrases. The slides are minimal; the notes carry the story.""",
            ),
        ),
        depends_on=("content-creation",),
    ),
    PhaseTemplate(
        name="final-formatting",
        parallel=False,
        agents=(
            AgentTemplate(
                "formatter-agent",
                """Format the final presentation for: {task}

LAYOUT FORMATS:
1. Standard slide:
## Slide Title
- Clear bullet point with complete thought
- Another concise point about the topic

2. Two-column slide:
## Slide Title
[layout: two-column]
Left:
- Key point about topic
Right:
[image: Description of visual]

3. Visual focus slide:
## Slide Title
[layout: visual-focus]
[image: Large central image description]
- Single powerful statement""",
            ),
        ),
        depends_on=("orchestration", "core-message", "content-creation", "speaker-notes"),
    ),
]


# =============================================================================
# Prompt additions
# =============================================================================

BASE_FORMATTING_GUIDELINES = """
PRESENTATION FORMATTING GUIDELINES:
1. Title slide: NO bullets, just title and optional subtitle
2. Content slides: 3-5 bullet points (3 preferred for clarity)
3. Each bullet: 6-10 words (complete thoughts, not fragments)
4. Use clear, concise language
5. One core idea per slide
6. Support markdown formatting (**bold**, *italic*)
7. Consider visual layouts (two-column, image-focused)

FORMATTING EXAMPLE:
## Clear Slide Title Here
- Complete thought about the main topic
- Supporting point with relevant details included
- Conclusion or call to action statement"""

_AGENT_ADDITIONS: Dict[str, str] = {
    "presentation-orchestrator": (
        "As the Presentation Orchestrator, guide agents to create visually engaging presentations.\n"
        "Encourage two-column layouts and image suggestions where they enhance understanding."
    ),
    "story-arc-specialist": (
        "Structure the narrative with flexibility:\n"
        "- Each story beat gets its own slide\n"
        "- Consider visual layouts for key moments"
    ),
    "core-message-specialist": (
        "Distill complex ideas into clear, concise points.\n"
        "If a concept needs more than 10 words, break it into multiple bullets or slides."
    ),
    "visual-clarity": (
        "Design for instant comprehension:\n"
        "- 3-second readability test\n"
        "- Suggest relevant visuals"
    ),
    "memorable-moments": (
        "Create impact through clarity and visuals:\n"
        "- Use **bold** for emphasis\n"
        "- Consider quote slides for key statements"
    ),
    "formatter-agent": (
        "Format presentations for clarity and impact.\n\n"
        f"CRITICAL: Start your output with {PRESENTATION_START} and end with {PRESENTATION_END}\n\n"
        "Example:\n"
        f"{PRESENTATION_START}\n"
        "## Slide 1: Title\n"
        "- First bullet point here\n\n"
        "## Slide 2: Next Topic\n"
        "...\n"
        f"{PRESENTATION_END}"
    ),
}

# Speaker notes are prose, so they skip the slide guidelines
_SPEAKER_NOTES_PROMPT = """
The slides are intentionally concise (3-5 bullets, 6-10 words each).
Your speaker notes should contain:
- Full narrative and context
- Detailed examples
- Delivery cues and timing
- Transition phrases
The slides are visual aids, not documents."""


def presentation_agent_prompt(agent_id: str) -> str:
    """Formatting instructions appended to a presentation agent's prompt."""
    if agent_id == "speaker-notes-specialist":
        return _SPEAKER_NOTES_PROMPT

    addition = _AGENT_ADDITIONS.get(agent_id)
    if addition is None:
        return BASE_FORMATTING_GUIDELINES
    return f"{BASE_FORMATTING_GUIDELINES}\n\n{addition}"
