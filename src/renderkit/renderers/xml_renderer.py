"""XML renderer built on xml.etree.ElementTree."""

from __future__ import annotations

import copy
import dataclasses
import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any, BinaryIO

from pydantic import BaseModel, Field

from renderkit.context import Context, check_context
from renderkit.errors import InvalidDataError, RenderFailedError
from renderkit.options import Option, new_options
from renderkit.renderer import Renderer, Sink, mime_xml
from renderkit.renderers.encoding import to_plain, utf8

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

_NAME_PATTERN = re.compile(r"^[A-Za-z_][\w.\-]*(:[A-Za-z_][\w.\-]*)?$")

_EXPECTED = "Element, single-root mapping, pydantic model or dataclass"


class XMLConfig(BaseModel):
    """XML renderer configuration, fixed at construction."""

    prefix: str = Field(
        default="",
        description="Default line prefix used in pretty mode",
    )
    indent: str = Field(
        default="",
        description="Default indentation unit used in pretty mode",
    )
    header: bool = Field(
        default=False,
        description="Emit the XML declaration before the document",
    )


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _check_name(name: str) -> str:
    if not _NAME_PATTERN.match(name):
        raise RenderFailedError(f"xml encode: invalid element name {name!r}")
    return name


def _fill(elem: ET.Element, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            key = str(key)
            if key.startswith("@"):
                elem.set(_check_name(key[1:]), _scalar(child))
            elif key == "#text":
                elem.text = _scalar(child)
            elif isinstance(child, (list, tuple)):
                for item in child:
                    _fill(ET.SubElement(elem, _check_name(key)), item)
            else:
                _fill(ET.SubElement(elem, _check_name(key)), child)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _fill(ET.SubElement(elem, "item"), item)
    else:
        elem.text = _scalar(value)


def to_element(data: Any) -> ET.Element:
    """Build an element tree from supported data shapes.

    Accepted shapes:
    - ElementTree.Element or ElementTree.ElementTree, used as-is
    - a mapping with exactly one key naming the root element; nested mappings
      become child elements, lists repeat the element, "@name" keys become
      attributes and "#text" sets the element text
    - a pydantic model or dataclass, rooted at its class name

    Raises:
        InvalidDataError: If data has none of these shapes
        RenderFailedError: If a key is not a valid XML name
    """
    if isinstance(data, ET.ElementTree):
        root = data.getroot()
        if root is None:
            raise InvalidDataError("xml", data, _EXPECTED)
        return root
    if ET.iselement(data):
        return data
    if isinstance(data, BaseModel) or (
        dataclasses.is_dataclass(data) and not isinstance(data, type)
    ):
        root = ET.Element(_check_name(type(data).__name__))
        _fill(root, to_plain(data))
        return root
    if isinstance(data, Mapping) and len(data) == 1:
        tag, value = next(iter(data.items()))
        root = ET.Element(_check_name(str(tag)))
        _fill(root, value)
        return root
    raise InvalidDataError("xml", data, _EXPECTED)


class XMLRenderer(Renderer):
    """Writes data as an XML document.

    In pretty mode the prefix and indent set through options win over the
    configured defaults, and every line starts with the prefix.
    """

    def __init__(self, config: XMLConfig | None = None):
        self.config = config or XMLConfig()

    def encode(self, data: Any, pretty: bool, prefix: str, indent: str) -> str:
        """Serialize data to XML text without the declaration."""
        root = to_element(data)
        if pretty and (prefix or indent):
            root = copy.deepcopy(root)
            ET.indent(root, space=indent)

        try:
            content = ET.tostring(root, encoding="unicode", short_empty_elements=False)
        except (TypeError, ValueError) as e:
            raise RenderFailedError(f"xml encode: {e}") from e

        if pretty and prefix:
            content = "\n".join(prefix + line for line in content.split("\n"))
        return content

    def render_context(
        self,
        ctx: Context,
        sink: Sink | BinaryIO,
        data: Any,
        *opts: Option,
    ) -> None:
        check_context(ctx)
        options = new_options().use(mime_xml()).use(*opts)

        fmt = options.format
        content = self.encode(
            data,
            pretty=fmt.pretty,
            prefix=fmt.prefix or self.config.prefix,
            indent=fmt.indent or self.config.indent,
        )
        body = utf8(content, "xml encode")

        if self.config.header:
            sink.write(XML_HEADER.encode("utf-8"))
            check_context(ctx)
        sink.write(body)


def xml() -> Renderer:
    """Create an XML renderer that writes the declaration and indents by two spaces."""
    return XMLRenderer(XMLConfig(indent="  ", header=True))
