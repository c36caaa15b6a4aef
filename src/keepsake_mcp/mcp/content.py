"""Content renderer: RemoteResult to the text block handed to the host."""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel

from keepsake_mcp.api.result import ApiFailure, RemoteResult

ERROR_PREFIX = "Error: "


class TextBlock(BaseModel):
    model_config = {"frozen": True}

    type: Literal["text"] = "text"
    text: str


class RenderedContent(BaseModel):
    """Content returned for one tool invocation (always one block)."""

    model_config = {"frozen": True}

    blocks: tuple[TextBlock, ...]

    @property
    def text(self) -> str:
        return "".join(block.text for block in self.blocks)


def _pretty(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def render(result: RemoteResult) -> RenderedContent:
    """Render *result* as exactly one text block.

    Failures become ``"Error: <message>"``. Successes become the indented
    JSON of ``data``, or of the whole payload when ``data`` is absent.
    """
    if isinstance(result, ApiFailure):
        text = ERROR_PREFIX + result.message
    elif result.has_data:
        text = _pretty(result.data)
    else:
        text = _pretty(result.payload)
    return RenderedContent(blocks=(TextBlock(text=text),))
