"""Exporters for converting import graphs and scan results to output formats."""

from .mermaid_exporter import to_mermaid
from .ascii_exporter import to_ascii, result_to_ascii
from .json_exporter import to_json, result_to_json

__all__ = ["to_mermaid", "to_ascii", "result_to_ascii", "to_json", "result_to_json"]
