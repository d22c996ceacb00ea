"""
Logiqx XML datafile writer.

Writes the internal metadata model as a pretty-printed Logiqx datafile.
Internal fields the format has no place for are left out.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from lxml import etree

from romdat import metadata
from .schema import (
    CLRMAMEPRO_ATTRIBUTES,
    CLRMAMEPRO_ELEMENT,
    DOCTYPE,
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


def serialize(document: Optional[metadata.MetadataFile], game_element: str = "game") -> Optional[bytes]:
    """
    Serialize an internal document to Logiqx XML.

    Args:
        document: Internal MetadataFile
        game_element: Element name used for each machine (game or machine)

    Returns:
        UTF-8 encoded XML with declaration, or None if no document was given

    Raises:
        ValueError: If game_element is not a Logiqx game element
    """
    if document is None:
        return None
    if game_element not in GAME_ELEMENTS:
        raise ValueError(f"Invalid game element: {game_element}")

    root = etree.Element(ROOT_ELEMENT)

    header = document.read(metadata.MetadataFile.HEADER_KEY, metadata.Header)
    if header is not None:
        root.append(_create_header_element(header))

    machines = document.read(metadata.MetadataFile.MACHINE_KEY, metadata.Machine, many=True) or []
    for machine in machines:
        root.append(_create_game_element(machine, game_element))

    return etree.tostring(
        root,
        encoding='utf-8',
        xml_declaration=True,
        pretty_print=True,
        doctype=DOCTYPE,
    )


def serialize_to_file(
    document: Optional[metadata.MetadataFile],
    path: Union[str, Path],
    game_element: str = "game"
) -> bool:
    """
    Serialize an internal document to a Logiqx XML file.

    Returns:
        True if the file was written, False if there was nothing to write

    Raises:
        OSError: If the file cannot be written
    """
    data = serialize(document, game_element=game_element)
    if data is None:
        return False

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Atomic write: write to temp file, then rename
    temp_file = path.with_suffix(path.suffix + '.tmp')
    try:
        with open(temp_file, 'wb') as f:
            f.write(data)
        temp_file.replace(path)
    except OSError:
        if temp_file.exists():
            temp_file.unlink()
        raise

    logger.info(f"Wrote Logiqx XML: {path}")
    return True


def _create_header_element(header: metadata.Header) -> etree._Element:
    header_elem = etree.Element(HEADER_ELEMENT)
    for tag, key in HEADER_TEXT_FIELDS:
        value = header.read_string(key)
        if value is not None:
            _add_element(header_elem, tag, value)

    clrmamepro = {
        name: header.read_string(key)
        for name, key in CLRMAMEPRO_ATTRIBUTES
        if header.read_string(key) is not None
    }
    if clrmamepro:
        etree.SubElement(header_elem, CLRMAMEPRO_ELEMENT, clrmamepro)

    return header_elem


def _create_game_element(machine: metadata.Machine, tag: str) -> etree._Element:
    game_elem = etree.Element(tag)
    for name, key in GAME_ATTRIBUTES:
        value = machine.read_string(key)
        if value is not None:
            game_elem.set(name, value)

    for text_tag, key in GAME_TEXT_FIELDS:
        value = machine.read_string(key)
        if value is not None:
            _add_element(game_elem, text_tag, value)

    for item_tag, (node_type, machine_key, attributes) in ITEM_ELEMENTS.items():
        if item_tag in SINGLE_ITEM_ELEMENTS:
            item = machine.read(machine_key, node_type)
            items = [item] if item is not None else []
        else:
            items = machine.read(machine_key, node_type, many=True) or []

        for item in items:
            item_elem = etree.SubElement(game_elem, item_tag)
            for name, key in attributes:
                value = item.read_string(key)
                if value is not None:
                    item_elem.set(name, value)

    return game_elem


def _add_element(parent: etree._Element, tag: str, text: str) -> None:
    elem = etree.SubElement(parent, tag)
    elem.text = text
