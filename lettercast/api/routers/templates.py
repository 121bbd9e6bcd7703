"""
Persona template catalogue.

Routes: GET /prompt-templates

Dependencies: lettercast.core.prompts
System role: Persona listing HTTP API
"""

from fastapi import APIRouter

from lettercast.core.prompts import list_persona_templates
from lettercast.models.common import PromptTemplateInfo

router = APIRouter(tags=["templates"])


@router.get("/prompt-templates", response_model=list[PromptTemplateInfo])
async def prompt_templates() -> list[PromptTemplateInfo]:
    """List every persona the chat prompt can be rendered for."""
    return [
        PromptTemplateInfo(id=template.id, name=template.name, description=template.description)
        for template in list_persona_templates()
    ]
