"""Parsing entry points, from one XML string up to a whole output folder.

Progressive API:
- Level 1: ``parse_compound_string`` / ``parse_compound_file`` and the index
  and Doxyfile counterparts turn one XML document into typed nodes.
- Level 2: ``load_data_model`` reads a Doxygen XML folder in index order.
- Level 3: ``build_workspace`` / ``process_folder`` link and resolve the
  whole graph for renderers.
"""

import time
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union

from lxml import etree

from doxygen_graph.data_model.accessor import ElementAccessor
from doxygen_graph.data_model.document import DataModel, DoxygenDocument, assemble_document
from doxygen_graph.data_model.index import Doxyfile, DoxygenIndex, build_doxyfile, build_doxygen_index
from doxygen_graph.shared import GraphConfig, InputError, SchemaViolation, get_logger
from doxygen_graph.workspace import Workspace, build_workspace

PathType = Union[str, Path]
T = TypeVar("T")

INDEX_FILE_NAME = "index.xml"
DOXYFILE_FILE_NAME = "Doxyfile.xml"
MS_PER_SECOND = 1000


def create_xml_parser(config: Optional[GraphConfig] = None) -> etree.XMLParser:
    """lxml parser that never touches the network or expands entities."""
    config = config or GraphConfig()
    return etree.XMLParser(
        resolve_entities=config.parser.resolve_entities,
        no_network=True,
        load_dtd=False,
        remove_comments=True,
        remove_pis=True,
        huge_tree=config.parser.huge_tree,
    )


def _parse_root(xml_string: Union[str, bytes], config: GraphConfig, source: str) -> Any:
    # lxml rejects str input that carries an encoding declaration
    data = xml_string.encode("utf-8") if isinstance(xml_string, str) else xml_string
    try:
        return etree.fromstring(data, create_xml_parser(config))
    except etree.XMLSyntaxError as e:
        raise InputError(f"Malformed XML ({e})", source) from e


def _read_file(file_path: PathType) -> bytes:
    path = Path(file_path)
    if not path.is_file():
        raise InputError("File not found", str(path))
    try:
        return path.read_bytes()
    except OSError as e:
        raise InputError(f"Cannot read file ({e})", str(path)) from e


def _build_root(
    xml_string: Union[str, bytes],
    root_tag: str,
    builder: Callable[[ElementAccessor, Any], T],
    config: Optional[GraphConfig],
    source: str,
) -> T:
    config = config or GraphConfig()
    root = _parse_root(xml_string, config, source)
    xml = ElementAccessor(config.parser)
    if xml.tag(root) != root_tag:
        raise SchemaViolation(
            f"Expected root element <{root_tag}>", xml.tag(root), "root", builder.__name__
        )
    return builder(xml, root)


def parse_compound_string(
    xml_string: Union[str, bytes], config: Optional[GraphConfig] = None
) -> DoxygenDocument:
    """Parse one compound file's content (root ``doxygen``).

    Examples:
        >>> document = parse_compound_string(
        ...     '<doxygen version="1.9.8"><compounddef id="classA" kind="class">'
        ...     '<compoundname>A</compoundname></compounddef></doxygen>')
        >>> document.compound_defs[0].compound_name
        'A'

    Raises:
        InputError: If the text is not well-formed XML
        SchemaViolation: If the tree does not match the compound schema
    """
    return _build_root(xml_string, "doxygen", assemble_document, config, "<string>")


def parse_compound_file(file_path: PathType, config: Optional[GraphConfig] = None) -> DoxygenDocument:
    return _build_root(_read_file(file_path), "doxygen", assemble_document, config, str(file_path))


def parse_index_string(
    xml_string: Union[str, bytes], config: Optional[GraphConfig] = None
) -> DoxygenIndex:
    """Parse ``index.xml`` content (root ``doxygenindex``)."""
    return _build_root(xml_string, "doxygenindex", build_doxygen_index, config, "<string>")


def parse_index_file(file_path: PathType, config: Optional[GraphConfig] = None) -> DoxygenIndex:
    return _build_root(_read_file(file_path), "doxygenindex", build_doxygen_index,
                       config, str(file_path))


def parse_doxyfile_string(
    xml_string: Union[str, bytes], config: Optional[GraphConfig] = None
) -> Doxyfile:
    return _build_root(xml_string, "doxyfile", build_doxyfile, config, "<string>")


def parse_doxyfile_file(file_path: PathType, config: Optional[GraphConfig] = None) -> Doxyfile:
    return _build_root(_read_file(file_path), "doxyfile", build_doxyfile, config, str(file_path))


def load_data_model(folder: PathType, config: Optional[GraphConfig] = None) -> DataModel:
    """Load a Doxygen XML output folder.

    Reads ``index.xml``, then every ``<refid>.xml`` the index lists in index
    order, then ``Doxyfile.xml`` when present. Parsed lxml trees are dropped
    once their nodes are built.

    Args:
        folder: Doxygen ``xml`` output folder
        config: Pipeline configuration

    Returns:
        Data model with member definitions indexed

    Raises:
        InputError: If the index or a listed compound file is missing or malformed
        SchemaViolation: If any document does not match the schema
    """
    config = config or GraphConfig()
    logger = get_logger(__name__, config.global_.run_id, "loader")
    start_time = time.perf_counter()
    folder_path = Path(folder)
    if not folder_path.is_dir():
        raise InputError("Not a folder", str(folder_path))

    data_model = DataModel()
    data_model.index = parse_index_file(folder_path / INDEX_FILE_NAME, config)

    loaded = set()
    for compound in data_model.index.compounds:
        if compound.refid in loaded:
            continue
        loaded.add(compound.refid)
        logger.debug("Loading compound file", extra={"refid": compound.refid})
        data_model.add_document(
            parse_compound_file(folder_path / f"{compound.refid}.xml", config)
        )

    doxyfile_path = folder_path / DOXYFILE_FILE_NAME
    if doxyfile_path.is_file():
        data_model.doxyfile = parse_doxyfile_file(doxyfile_path, config)

    data_model.process_member_defs()

    logger.info(
        "Data model loaded",
        extra={
            "folder": str(folder_path),
            "documents": len(data_model.documents),
            "compounds": len(data_model.compound_defs),
            "member_defs": len(data_model.member_defs_by_id),
            "processing_time_ms": (time.perf_counter() - start_time) * MS_PER_SECOND,
        },
    )
    return data_model


def process_folder(folder: PathType, config: Optional[GraphConfig] = None) -> Workspace:
    """Load ``folder`` and return the resolved workspace."""
    config = config or GraphConfig()
    start_time = time.perf_counter()
    data_model = load_data_model(folder, config)
    load_time_ms = (time.perf_counter() - start_time) * MS_PER_SECOND
    workspace = build_workspace(data_model, config)
    workspace.metrics.phase_times_ms["load"] = load_time_ms
    return workspace
