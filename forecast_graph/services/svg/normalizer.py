"""SVG normalization ahead of theme recoloring.

The provider's SVG carries its own presentation (embedded stylesheets,
filters, white background panels). Those are stripped here so the scoped
theme stylesheet is the only thing deciding colors.
"""

import logging
import re
import xml.etree.ElementTree as ET

from forecast_graph.config.constants import MSG_INVALID_SVG, ErrorKind, PipelineStep, log_pipeline_step
from forecast_graph.services.errors import GraphPipelineError

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

_STRIPPED_ELEMENTS = frozenset({"style", "filter"})

# Only these four spellings count as white; hsl(), percentage rgb() and
# CSS variables are not recognised.
_WHITE_RE = re.compile(
    r"^(#fff|#ffffff|white|rgb\(\s*255\s*,\s*255\s*,\s*255\s*\))\s*(!important)?$",
    re.IGNORECASE,
)
_NUMBER_RE = re.compile(r"^(\d+\.?\d*|\.\d+)$")


def _local(tag: str) -> str:
    """Tag name without its namespace."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def is_white(value: str | None) -> bool:
    return bool(value) and bool(_WHITE_RE.match(value.strip()))


def _declarations(style: str) -> list[tuple[str, str]]:
    decls = []
    for chunk in style.split(";"):
        if ":" not in chunk:
            continue
        prop, _, value = chunk.partition(":")
        decls.append((prop.strip(), value.strip()))
    return decls


def _find_svg(root: ET.Element) -> ET.Element | None:
    for element in root.iter():
        if _local(element.tag) == "svg":
            return element
    return None


def _ensure_viewbox(svg: ET.Element) -> None:
    if svg.get("viewBox"):
        return
    width = (svg.get("width") or "").strip().removesuffix("px")
    height = (svg.get("height") or "").strip().removesuffix("px")
    if _NUMBER_RE.match(width) and _NUMBER_RE.match(height):
        svg.set("viewBox", f"0 0 {width} {height}")


def _strip_presentation(svg: ET.Element) -> None:
    for parent in list(svg.iter()):
        for child in list(parent):
            if _local(child.tag) in _STRIPPED_ELEMENTS:
                parent.remove(child)
    for element in svg.iter():
        element.attrib.pop("filter", None)


def _clear_white_rect(rect: ET.Element) -> None:
    style = rect.get("style") or ""
    decls = _declarations(style)
    white_style = any(prop.lower() == "fill" and is_white(value) for prop, value in decls)
    if not (is_white(rect.get("fill")) or white_style):
        return

    rect.set("fill", "none")
    kept = [(prop, value) for prop, value in decls if prop.lower() != "fill"]
    if len(kept) == len(decls):
        return
    if kept:
        rect.set("style", ";".join(f"{prop}:{value}" for prop, value in kept))
    else:
        rect.attrib.pop("style", None)


def _patch_foreign_object(foreign: ET.Element, background: str) -> None:
    content = next(iter(foreign), None)
    if content is None:
        return
    declaration = f"background:{background} !important;"
    existing = (content.get("style") or "").strip()
    if declaration in existing:
        return
    base = existing.rstrip(";")
    content.set("style", f"{base};{declaration}" if base else declaration)


def normalize_svg(svg_text: str, background: str) -> str:
    """
    Sanitize SVG markup for theming.

    Args:
        svg_text: Raw SVG (or XML document containing an svg element)
        background: Color forced onto foreignObject content

    Returns:
        Serialized svg element

    Raises:
        GraphPipelineError: the text is not XML or holds no svg element
    """
    log_pipeline_step(PipelineStep.NORMALIZE)
    try:
        root = ET.fromstring(svg_text.strip().encode("utf-8"))
    except (ET.ParseError, UnicodeError) as e:
        logger.warning("SVG parse failed: %s", e)
        raise GraphPipelineError(ErrorKind.INVALID_SVG_CONTENT, MSG_INVALID_SVG) from e

    svg = _find_svg(root)
    if svg is None:
        raise GraphPipelineError(ErrorKind.INVALID_SVG_CONTENT, MSG_INVALID_SVG)

    _ensure_viewbox(svg)
    _strip_presentation(svg)

    for element in svg.iter():
        name = _local(element.tag)
        if name == "rect":
            _clear_white_rect(element)
        elif name == "foreignObject":
            _patch_foreign_object(element, background)

    svg.tail = None
    return ET.tostring(svg, encoding="unicode")
