"""Persona templates and system prompt assembly."""

from lettercast.core.prompts.persona_templates import (
    DEFAULT_CHUNK_STYLE,
    PERSONA_TEMPLATES,
    PersonaTemplate,
    get_persona_template,
    list_persona_templates,
    render_letter_base_prompt,
    render_persona_prompt,
)
from lettercast.core.prompts.prompt_builder import (
    build_chat_system_prompt,
    build_letter_system_prompt,
    extract_style_hint,
)

__all__ = [
    "DEFAULT_CHUNK_STYLE",
    "PERSONA_TEMPLATES",
    "PersonaTemplate",
    "get_persona_template",
    "list_persona_templates",
    "render_persona_prompt",
    "render_letter_base_prompt",
    "build_chat_system_prompt",
    "build_letter_system_prompt",
    "extract_style_hint",
]
