"""Render endpoint: turns modular document JSON into a presentation tree, HTML or Markdown."""

import logging

from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.models.nodes import BLOCK_CONTAINERS
from app.models.render_request import RenderRequest
from app.models.render_response import RenderResponse
from app.services.assembler import render_parsed
from app.services.coercion import parse_document
from app.services.html_renderer import to_html
from app.services.markdown_export import to_markdown

logger = logging.getLogger(__name__)

RENDER_RATE_LIMIT = "60/minute"

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post(
    "/render",
    response_model=RenderResponse,
    response_model_exclude_none=True,
    summary="Render a modular document",
    description=(
        "Coerces an arbitrary modular document payload and renders its title, "
        "byline, featured image and blocks. Malformed fields are treated as "
        "absent, so the request never fails because of the document's shape."
    ),
)
@limiter.limit(RENDER_RATE_LIMIT)
async def render(request: Request, body: RenderRequest) -> RenderResponse:
    """Render ``body.document`` in the requested ``format``."""
    document = parse_document(body.document)
    logger.info(
        "Render request received",
        extra={"format": body.format, "blocks": len(document.blocks)},
    )

    tree = render_parsed(document)
    rendered = sum(1 for child in tree.children if child.type in BLOCK_CONTAINERS)
    response = RenderResponse(
        title=document.seo_meta.h1 if document.seo_meta else "",
        block_count=len(document.blocks),
        rendered_block_count=rendered,
        format=body.format,
    )

    if body.format == "html":
        return response.model_copy(update={"html": to_html(tree)})
    if body.format == "markdown":
        return response.model_copy(update={"markdown": to_markdown(tree)})
    return response.model_copy(update={"tree": tree})
