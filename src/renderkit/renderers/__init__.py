"""
Format adapters implementing the Renderer contract.

Each adapter delegates encoding to an established encoder and only adds
option handling, content-type defaults and cancellation checks.
"""

from .binary_renderer import BinaryRenderer, binary
from .csv_renderer import CSVRenderer, csv
from .json_renderer import JSONConfig, JSONRenderer, json
from .text_renderer import TextRenderer, text
from .xml_renderer import XMLConfig, XMLRenderer, xml
from .yaml_renderer import YAMLConfig, YAMLRenderer, yaml

__all__ = [
    "BinaryRenderer",
    "CSVRenderer",
    "JSONConfig",
    "JSONRenderer",
    "TextRenderer",
    "XMLConfig",
    "XMLRenderer",
    "YAMLConfig",
    "YAMLRenderer",
    "binary",
    "csv",
    "json",
    "text",
    "xml",
    "yaml",
]
