"""Public parsing and graph-building functions."""

from doxygen_graph.api.parser import (
    create_xml_parser,
    load_data_model,
    parse_compound_file,
    parse_compound_string,
    parse_doxyfile_file,
    parse_doxyfile_string,
    parse_index_file,
    parse_index_string,
    process_folder,
)
from doxygen_graph.workspace import build_workspace

__all__ = [
    "build_workspace",
    "create_xml_parser",
    "load_data_model",
    "parse_compound_file",
    "parse_compound_string",
    "parse_doxyfile_file",
    "parse_doxyfile_string",
    "parse_index_file",
    "parse_index_string",
    "process_folder",
]
