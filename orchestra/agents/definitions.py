"""Specialist agent definitions.

Static catalog data: identity, responsibilities, capabilities and the
default model tier of every agent the workflows can call.
"""

from typing import List

from orchestra.core.catalog import AgentCatalog, AgentDescriptor
from orchestra.core.model_selection import BALANCED_MODEL, IMAGE_MODEL, LITE_MODEL, PREMIUM_MODEL
from orchestra.core.schemas import AgentCategory


# =============================================================================
# Orchestrator
# =============================================================================

ORCHESTRATOR_AGENTS = [
    AgentDescriptor(
        id="orchestrator",
        name="Master Orchestrator",
        description="Analyzes tasks and coordinates specialist agents",
        category=AgentCategory.ORCHESTRATOR,
        default_model=PREMIUM_MODEL,
        responsibilities=(
            "Task decomposition",
            "Agent selection",
            "Model optimization",
            "Workflow management",
            "Result synthesis",
        ),
        capabilities=("task-analysis", "workflow-planning", "agent-coordination", "result-aggregation"),
        temperature=0.3,
    ),
]


# =============================================================================
# Research & Analysis
# =============================================================================

RESEARCH_AGENTS = [
    AgentDescriptor(
        id="research-agent",
        name="General Research Agent",
        description="Conducts web research and critical analysis of findings",
        category=AgentCategory.RESEARCH,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Web research with critical evaluation",
            "Information gathering and verification",
            "Background research with balanced perspectives",
            "Identifying biases and limitations in sources",
        ),
        capabilities=("research", "analysis", "summarization", "critical-appraisal"),
        temperature=0.5,
    ),
    AgentDescriptor(
        id="biblical-research",
        name="Biblical Research Specialist",
        description="Analyzes scripture and theological concepts with scholarly critique",
        category=AgentCategory.RESEARCH,
        default_model=PREMIUM_MODEL,
        responsibilities=(
            "Scripture analysis with hermeneutical awareness",
            "Cross-reference finding and contextual evaluation",
            "Original language insights with translation critiques",
            "Critical examination of interpretive traditions",
        ),
        capabilities=("biblical-analysis", "theology", "hebrew", "greek", "critical-appraisal"),
        temperature=0.3,
    ),
    AgentDescriptor(
        id="biblical-references",
        name="Biblical References Specialist",
        description="Enriches content with relevant biblical references and cross-references",
        category=AgentCategory.RESEARCH,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Finding relevant scripture references",
            "Providing verse context and interpretation",
            "Connecting themes to biblical passages",
        ),
        capabilities=("biblical-references", "scripture-search", "cross-referencing"),
        temperature=0.3,
    ),
    AgentDescriptor(
        id="data-analyst",
        name="Data Analysis Agent",
        description="Performs statistical analysis with critical evaluation of findings",
        category=AgentCategory.RESEARCH,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Statistical analysis with methodology critique",
            "Trend identification and significance testing",
            "Limitations and assumptions assessment",
        ),
        capabilities=("data-analysis", "statistics", "visualization", "critical-appraisal"),
        temperature=0.3,
    ),
    AgentDescriptor(
        id="source-validator",
        name="Source Validation Agent",
        description="Critically evaluates claims and source reliability",
        category=AgentCategory.RESEARCH,
        default_model=LITE_MODEL,
        responsibilities=(
            "Fact verification with confidence levels",
            "Source credibility and bias assessment",
            "Identifying conflicting evidence and perspectives",
        ),
        capabilities=("fact-checking", "validation", "critical-appraisal"),
        temperature=0.1,
    ),
    AgentDescriptor(
        id="critical-appraiser",
        name="Critical Appraisal Specialist",
        description="Provides balanced critical evaluation of any subject",
        category=AgentCategory.RESEARCH,
        default_model=PREMIUM_MODEL,
        responsibilities=(
            "Comprehensive critical analysis",
            "Identifying strengths and weaknesses",
            "Evaluating evidence quality",
            "Highlighting assumptions and biases",
        ),
        capabilities=("critical-appraisal", "analysis", "evaluation", "critique"),
        temperature=0.4,
    ),
]


# =============================================================================
# Content Creation
# =============================================================================

CONTENT_AGENTS = [
    AgentDescriptor(
        id="outline-agent",
        name="Outline Creator",
        description="Creates structured outlines and document frameworks",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=("Document structure planning", "Logical flow creation", "Key point identification"),
        capabilities=("outlining", "structure", "organization"),
        temperature=0.4,
    ),
    AgentDescriptor(
        id="title-generator",
        name="Title Generator",
        description="Creates catchy titles and section headers",
        category=AgentCategory.CONTENT,
        default_model=LITE_MODEL,
        responsibilities=("Title creation", "Headline writing", "Section naming"),
        capabilities=("title-generation", "headlines", "seo"),
        temperature=0.8,
    ),
    AgentDescriptor(
        id="introduction-writer",
        name="Introduction Specialist",
        description="Crafts compelling introductions and hooks",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=("Hook creation", "Thesis statement writing", "Context setting", "Audience engagement"),
        capabilities=("introduction-writing", "hooks", "engagement", "content-writing"),
        temperature=0.7,
    ),
    AgentDescriptor(
        id="body-writer",
        name="Body Content Writer",
        description="Develops detailed content with balanced perspectives",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Main content development with critical analysis",
            "Supporting evidence integration and evaluation",
            "Detail elaboration with counterarguments",
        ),
        capabilities=("content-writing", "elaboration", "evidence", "critical-appraisal"),
        temperature=0.6,
    ),
    AgentDescriptor(
        id="conclusion-writer",
        name="Conclusion Specialist",
        description="Creates thoughtful conclusions with nuanced perspectives",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Summary creation with balanced assessment",
            "Key takeaway emphasis with caveats",
            "Acknowledging limitations and open questions",
        ),
        capabilities=("conclusion-writing", "summarization", "cta", "content-writing"),
        temperature=0.6,
    ),
    AgentDescriptor(
        id="illustration-finder",
        name="Illustration Finder",
        description="Finds relevant stories and examples",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=("Story discovery", "Example finding", "Analogy creation"),
        capabilities=("storytelling", "examples", "analogies"),
        temperature=0.7,
    ),
    AgentDescriptor(
        id="discussion-creator",
        name="Discussion Question Creator",
        description="Creates engaging discussion questions",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=("Question formulation", "Discussion guide creation", "Depth progression"),
        capabilities=("questions", "discussion", "engagement"),
        temperature=0.6,
    ),
]


# =============================================================================
# Presentation Specialists
# =============================================================================

PRESENTATION_AGENTS = [
    AgentDescriptor(
        id="presentation-orchestrator",
        name="Presentation Strategy Orchestrator",
        description="Coordinates specialist agents to create transformational presentations",
        category=AgentCategory.CONTENT,
        default_model=PREMIUM_MODEL,
        responsibilities=(
            "Identifying the audience's current reality",
            "Extracting the core transformation story",
            "Ensuring storytelling best practices",
        ),
        capabilities=("presentation-planning", "workflow-planning"),
        temperature=0.3,
    ),
    AgentDescriptor(
        id="story-arc-specialist",
        name="Story Arc & Narrative Specialist",
        description="Structures presentations using hero's journey principles",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Establishing the current reality (What Is)",
            "Crafting the vision of possibility (What Could Be)",
            "Creating compelling calls to action",
            "Positioning audience as protagonist",
        ),
        capabilities=("narrative-structure", "storytelling", "hero-journey"),
        temperature=0.5,
    ),
    AgentDescriptor(
        id="core-message-specialist",
        name="Core Message & Focus Specialist",
        description="Distills complex ideas into a single powerful message",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Creating a concise, memorable core statement",
            "Ensuring all content supports the central message",
            "Filtering out non-essential information",
        ),
        capabilities=("message-distillation", "focus", "clarity"),
        temperature=0.4,
    ),
    AgentDescriptor(
        id="memorable-moments",
        name="Memorable Moments Specialist",
        description="Creates unforgettable presentation highlights",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Creating powerful reveals or demonstrations",
            "Crafting quotable statements",
            "Ensuring moments amplify the core message",
        ),
        capabilities=("impact-creation", "memorability"),
        temperature=0.7,
    ),
    AgentDescriptor(
        id="speaker-notes-specialist",
        name="Speaker Notes & Delivery Specialist",
        description="Creates comprehensive speaker notes and delivery guidance",
        category=AgentCategory.CONTENT,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Writing conversational speaker notes for each slide",
            "Adding delivery cues and timing suggestions",
            "Including transition phrases between slides",
        ),
        capabilities=("speaker-notes", "delivery-guidance", "presentation-coaching"),
        temperature=0.6,
    ),
]


# =============================================================================
# Visual & Creative
# =============================================================================

VISUAL_AGENTS = [
    AgentDescriptor(
        id="image-generator",
        name="Image Generation Specialist",
        description="Creates custom images and illustrations",
        category=AgentCategory.VISUAL,
        default_model=IMAGE_MODEL,
        responsibilities=("Custom image creation", "Illustration generation", "Style consistency"),
        capabilities=("image-generation", "illustration", "visual-design"),
        temperature=0.7,
    ),
    AgentDescriptor(
        id="visual-designer",
        name="Visual Design Consultant",
        description="Provides design concepts and layout suggestions",
        category=AgentCategory.VISUAL,
        default_model=BALANCED_MODEL,
        responsibilities=("Layout planning", "Color scheme selection", "Visual hierarchy design"),
        capabilities=("design", "layout", "color-theory"),
        temperature=0.6,
    ),
    AgentDescriptor(
        id="visual-clarity",
        name="Visual Clarity & Design Specialist",
        description="Ensures visual design enhances understanding",
        category=AgentCategory.VISUAL,
        default_model=BALANCED_MODEL,
        responsibilities=(
            "Enforcing one concept per slide",
            "Ensuring instant comprehension (3-second rule)",
            "Eliminating cognitive noise",
            "Suggesting purposeful imagery",
        ),
        capabilities=("visual-design", "clarity", "hierarchy"),
        temperature=0.5,
    ),
]


# =============================================================================
# Domain Specialists
# =============================================================================

DOMAIN_AGENTS = [
    AgentDescriptor(
        id="sermon-specialist",
        name="Sermon Development Expert",
        description="Specializes in homiletics and sermon structure",
        category=AgentCategory.DOMAIN,
        default_model=PREMIUM_MODEL,
        responsibilities=("Sermon structure planning", "Homiletical analysis", "Application development"),
        capabilities=("homiletics", "preaching", "sermon-structure"),
        temperature=0.4,
    ),
    AgentDescriptor(
        id="theology-analyst",
        name="Theological Analysis Expert",
        description="Provides theological analysis with scholarly critique",
        category=AgentCategory.DOMAIN,
        default_model=PREMIUM_MODEL,
        responsibilities=(
            "Doctrinal verification with historical development",
            "Theological interpretation with multiple perspectives",
            "Critical examination of theological assumptions",
        ),
        capabilities=("theology", "doctrine", "church-history", "critical-appraisal"),
        temperature=0.2,
    ),
    AgentDescriptor(
        id="curriculum-designer",
        name="Curriculum Design Specialist",
        description="Designs educational curricula and course structures",
        category=AgentCategory.DOMAIN,
        default_model=BALANCED_MODEL,
        responsibilities=("Learning objective design", "Course structure planning", "Assessment creation"),
        capabilities=("curriculum-design", "education", "assessment"),
        temperature=0.4,
    ),
]


# =============================================================================
# Quality & Enhancement
# =============================================================================

QUALITY_AGENTS = [
    AgentDescriptor(
        id="editor-agent",
        name="Content Editor",
        description="Edits content for grammar, style, and coherence",
        category=AgentCategory.QUALITY,
        default_model=BALANCED_MODEL,
        responsibilities=("Grammar correction", "Style improvement", "Coherence checking"),
        capabilities=("editing", "proofreading", "style-guide"),
        temperature=0.3,
    ),
    AgentDescriptor(
        id="formatter-agent",
        name="Format Specialist",
        description="Applies consistent formatting and style guides",
        category=AgentCategory.QUALITY,
        default_model=LITE_MODEL,
        responsibilities=("Format standardization", "Consistency checking", "Document structure"),
        capabilities=("formatting", "style-consistency"),
        temperature=0.1,
    ),
    AgentDescriptor(
        id="seo-optimizer",
        name="SEO Optimization Agent",
        description="Optimizes content for search engines",
        category=AgentCategory.QUALITY,
        default_model=LITE_MODEL,
        responsibilities=("Keyword optimization", "Meta description writing", "Readability optimization"),
        capabilities=("seo", "keywords", "web-optimization"),
        temperature=0.4,
    ),
    AgentDescriptor(
        id="accessibility-checker",
        name="Accessibility Specialist",
        description="Ensures content accessibility standards",
        category=AgentCategory.QUALITY,
        default_model=LITE_MODEL,
        responsibilities=("Alt text creation", "Readability checking", "Accessibility compliance"),
        capabilities=("accessibility", "wcag", "readability"),
        temperature=0.2,
    ),
]


ALL_AGENTS: List[AgentDescriptor] = [
    *ORCHESTRATOR_AGENTS,
    *RESEARCH_AGENTS,
    *CONTENT_AGENTS,
    *PRESENTATION_AGENTS,
    *VISUAL_AGENTS,
    *DOMAIN_AGENTS,
    *QUALITY_AGENTS,
]


def default_catalog() -> AgentCatalog:
    """Build a catalog holding every built-in agent."""
    return AgentCatalog(ALL_AGENTS)
