"""
Logiqx XML datafile parser.

Builds the internal metadata model directly. Attributes and child elements
that have no internal field are kept in the node's additional elements.
"""

import logging
from pathlib import Path
from typing import Union

from lxml import etree

from romdat import metadata
from romdat.path_processor import open_stream
from .schema import (
    CLRMAMEPRO_ATTRIBUTES,
    CLRMAMEPRO_ELEMENT,
    GAME_ATTRIBUTES,
    GAME_ELEMENTS,
    GAME_TEXT_FIELDS,
    HEADER_ELEMENT,
    HEADER_TEXT_FIELDS,
    ITEM_ELEMENTS,
    ROOT_ELEMENT,
    SINGLE_ITEM_ELEMENTS,
)

logger = logging.getLogger(__name__)


class LogiqxError(Exception):
    """Logiqx input is not well-formed XML or not a datafile."""
    pass


def deserialize(path: Union[str, Path]) -> metadata.MetadataFile:
    """
    Parse a Logiqx XML file.

    Args:
        path: Path to the XML file (plain or gzip-compressed)

    Returns:
        Internal MetadataFile

    Raises:
        FileNotFoundError: If the file doesn't exist
        LogiqxError: If the XML is malformed
    """
    with open_stream(path) as stream:
        data = stream.read()

    logger.debug(f"Parsing Logiqx XML: {path}")
    return deserialize_bytes(data)


def deserialize_bytes(data: bytes) -> metadata.MetadataFile:
    """
    Parse Logiqx XML content.

    Args:
        data: Encoded XML document

    Returns:
        Internal MetadataFile

    Raises:
        LogiqxError: If the XML is malformed or the root is not <datafile>
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        raise LogiqxError(f"Malformed Logiqx XML: {e}") from e

    if root.tag != ROOT_ELEMENT:
        raise LogiqxError(f"Expected <{ROOT_ELEMENT}> root element, found <{root.tag}>")

    document = metadata.MetadataFile()
    machines = []
    additional = []

    for child in _elements(root):
        if child.tag == HEADER_ELEMENT:
            document[metadata.MetadataFile.HEADER_KEY] = _parse_header(child)
        elif child.tag in GAME_ELEMENTS:
            machines.append(_parse_game(child))
        else:
            additional.append(_raw(child))

    if machines:
        document[metadata.MetadataFile.MACHINE_KEY] = machines
    if additional:
        document[metadata.DictBase.ADDITIONAL_ELEMENTS_KEY] = additional

    logger.info(f"Parsed {len(machines)} games from Logiqx XML")
    return document


def _parse_header(header_elem: etree._Element) -> metadata.Header:
    text_fields = dict(HEADER_TEXT_FIELDS)
    clrmamepro_attributes = dict(CLRMAMEPRO_ATTRIBUTES)
    header = metadata.Header()
    additional = []

    for child in _elements(header_elem):
        if child.tag in text_fields:
            header[text_fields[child.tag]] = child.text or ""
        elif child.tag == CLRMAMEPRO_ELEMENT:
            for name, value in child.attrib.items():
                if name in clrmamepro_attributes:
                    header[clrmamepro_attributes[name]] = value
                else:
                    additional.append(f"{name}: {value}")
        else:
            additional.append(_raw(child))

    if additional:
        header[metadata.DictBase.ADDITIONAL_ELEMENTS_KEY] = additional
    return header


def _parse_game(game_elem: etree._Element) -> metadata.Machine:
    attributes = dict(GAME_ATTRIBUTES)
    text_fields = dict(GAME_TEXT_FIELDS)
    machine = metadata.Machine()
    additional = []

    for name, value in game_elem.attrib.items():
        if name in attributes:
            machine[attributes[name]] = value
        else:
            additional.append(f"{name}: {value}")

    items = {}
    for child in _elements(game_elem):
        if child.tag in text_fields:
            machine[text_fields[child.tag]] = child.text or ""
        elif child.tag in ITEM_ELEMENTS:
            _, machine_key, _ = ITEM_ELEMENTS[child.tag]
            item = _parse_item(child)
            if child.tag in SINGLE_ITEM_ELEMENTS:
                machine[machine_key] = item
            else:
                items.setdefault(machine_key, []).append(item)
        else:
            additional.append(_raw(child))

    machine.update(items)
    if additional:
        machine[metadata.DictBase.ADDITIONAL_ELEMENTS_KEY] = additional
    return machine


def _parse_item(elem: etree._Element) -> metadata.DatItem:
    node_type, _, attribute_pairs = ITEM_ELEMENTS[elem.tag]
    attributes = dict(attribute_pairs)
    node = node_type()
    additional = []

    for name, value in elem.attrib.items():
        if name in attributes:
            node[attributes[name]] = value
        else:
            additional.append(f"{name}: {value}")

    for child in _elements(elem):
        additional.append(_raw(child))

    if additional:
        node[metadata.DictBase.ADDITIONAL_ELEMENTS_KEY] = additional
    return node


def _elements(parent: etree._Element):
    """Child elements, skipping comments and processing instructions."""
    return (child for child in parent if isinstance(child.tag, str))


def _raw(elem: etree._Element) -> str:
    return etree.tostring(elem, encoding="unicode", with_tail=False).strip()
