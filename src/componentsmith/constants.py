"""Shared constants: single source of truth for cross-module values.

StrEnum members are str-compatible, so downstream code (JSON, SQL,
API payloads) works unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class ContentType(StrEnum):
    """Semantic kind of a code block body."""

    REACT = "react"
    SCRIPT = "script"
    HTML = "html"
    MARKDOWN = "markdown"
    DIAGRAM = "diagram"
    VECTOR_GRAPHIC = "vector-graphic"
    CODE = "code"


class FileNodeType(StrEnum):
    """Node kinds in a file-structure tree."""

    DIRECTORY = "directory"
    FILE = "file"


# Names older generators put in ``type="..."`` fence metadata
LEGACY_CONTENT_TYPES: dict[str, ContentType] = {
    "nodejs": ContentType.SCRIPT,
    "mermaid": ContentType.DIAGRAM,
    "svg": ContentType.VECTOR_GRAPHIC,
    "text": ContentType.CODE,
}

# ── Extraction ───────────────────────────────────────────

DEFAULT_LANGUAGE = "plaintext"

# ── Markup ───────────────────────────────────────────────

# Element nesting beyond this is rejected as a parse error
MAX_XML_DEPTH = 200

# ── Generation ───────────────────────────────────────────

DEFAULT_PROVIDER = "groq"
DEFAULT_PROMPT_LANGUAGE = "english"
DEFAULT_GENERATED_LANGUAGE = "typescript"
THINKING_MAX_TOKENS = 500
FALLBACK_THINKING_STEPS: tuple[str, ...] = (
    "Analyzing prompt requirements...",
    "Determining component structure...",
    "Planning responsive design approach...",
    "Generating code with appropriate styles and functionality...",
)

# Languages whose blocks count as the "headline" component code
PRIMARY_CODE_LANGUAGES = frozenset({"typescript", "tsx", "jsx"})

# ── Resilience ───────────────────────────────────────────

RETRY_MAX_ATTEMPTS = 3
RETRY_INITIAL_WAIT = 2.0
RETRY_MAX_WAIT = 10.0
CB_LLM_FAILURE_THRESHOLD = 5
CB_LLM_RECOVERY_TIMEOUT = 30

# ── Storage ──────────────────────────────────────────────

ID_HEX_LENGTH = 32
RECENT_COMPONENTS_LIMIT = 10

# ── Logging ──────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 500

# ── API ──────────────────────────────────────────────────

# Routes that call a provider or touch stored components. Extraction,
# classification, screening and rendering stay public.
KEYED_PATHS = frozenset({"/api/generate", "/api/xml/convert"})
KEYED_PREFIXES = ("/api/versions", "/api/components")
