"""Metadata rendering: ledger state -> self-contained data URI.

Pipeline for one identifier:
    1. Substitute the name and canonical hex into the seven-part SVG template
    2. Base64 the SVG into an image data URI
    3. Wrap it in a JSON object {name, description, image}
    4. Base64 the JSON into an application/json data URI

Decoding the outer URI gives the JSON text; decoding its ``image`` field
gives back the SVG byte for byte. Output depends only on the entry's
current name and its identifier.
"""

from __future__ import annotations

import base64
import json
from typing import Any

from .codec import encode
from .ledger import ColorLedger
from .template import render_template

SVG_CONTENT_TYPE = "image/svg+xml"
JSON_CONTENT_TYPE = "application/json"

DEFAULT_DESCRIPTION = (
    "One of 16,777,216 colors. Each color has exactly one owner, "
    "who chooses its name."
)

# Background panel, swatch, name label, hex label
SVG_PARTS: tuple[str, ...] = (
    '<svg xmlns="http://www.w3.org/2000/svg" preserveAspectRatio="xMinYMin meet" '
    'viewBox="0 0 350 350"><style>.base { fill: black; font-family: monospace; '
    'font-size: 16px; }</style><rect width="100%" height="100%" fill="white" />'
    '<rect x="25" y="25" width="300" height="240" fill="#',
    "{{hex}}",
    '" /><text x="25" y="295" class="base">',
    "{{name}}",
    '</text><text x="25" y="320" class="base">#',
    "{{hex}}",
    "</text></svg>",
)
SVG_TEMPLATE = "".join(SVG_PARTS)


def to_data_uri(content_type: str, payload: bytes) -> str:
    """Wrap bytes in a base64 data URI."""
    return f"data:{content_type};base64,{base64.b64encode(payload).decode('ascii')}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into (content_type, payload).

    Raises:
        ValueError: If uri is not a base64 data URI
    """
    if not uri.startswith("data:"):
        raise ValueError(f"Not a data URI: {uri[:32]!r}")
    header, sep, payload = uri[len("data:"):].partition(",")
    if not sep or not header.endswith(";base64"):
        raise ValueError(f"Not a base64 data URI: {uri[:32]!r}")
    content_type = header[: -len(";base64")]
    return content_type, base64.b64decode(payload, validate=True)


def render_svg(name: str, hex_text: str) -> str:
    """Substitute a name and canonical hex into the SVG template."""
    return render_template(SVG_TEMPLATE, {"name": name, "hex": hex_text})


def build_metadata(name: str, svg: str, description: str = DEFAULT_DESCRIPTION) -> dict[str, Any]:
    """JSON metadata object embedding the SVG as a data URI."""
    return {
        "name": name,
        "description": description,
        "image": to_data_uri(SVG_CONTENT_TYPE, svg.encode("utf-8")),
    }


def render_document(name: str, hex_text: str, description: str = DEFAULT_DESCRIPTION) -> str:
    """Full pipeline from (name, hex) to the outer JSON data URI."""
    metadata = build_metadata(name, render_svg(name, hex_text), description)
    return to_data_uri(JSON_CONTENT_TYPE, json.dumps(metadata).encode("utf-8"))


class MetadataRenderer:
    """Renders documents from the current ledger state."""

    def __init__(self, ledger: ColorLedger, description: str = DEFAULT_DESCRIPTION) -> None:
        self._ledger = ledger
        self.description = description

    def render(self, token_id: int) -> str:
        """Render the document for an existing entry.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        name = self._ledger.name_of(token_id)
        return render_document(name, encode(token_id), self.description)
