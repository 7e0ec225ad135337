from typing import Optional

from pydantic import BaseModel

from app.models.nodes import Node


class RenderResponse(BaseModel):
    title: str
    block_count: int
    rendered_block_count: int
    format: str
    tree: Optional[Node] = None
    html: Optional[str] = None
    markdown: Optional[str] = None
