# xgen_docx2table/core/processor/docx_helper/docx_references.py
"""
DOCX Reference Collector

Walks the main document part's relationship table and lists every embedded
equation object and every image, independent of which cells use them.

- collect_references: (equation_refs, image_refs)
"""
import logging
from typing import List, Tuple

from docx.opc.constants import RELATIONSHIP_TYPE as RT

from xgen_docx2table.core.functions.resolution import ObjectReference

logger = logging.getLogger("xgen_docx2table.docx.references")


def _part_format(part) -> str:
    try:
        return str(part.partname.ext).lower()
    except AttributeError:
        return ""


def collect_references(doc) -> Tuple[List[ObjectReference], List[ObjectReference]]:
    """
    Collect embedded-object references of a document.

    Args:
        doc: python-docx Document object

    Returns:
        (equation_refs, image_refs), each sorted by relationship id.
        External (linked) relationships are skipped since the package holds
        no bytes for them.
    """
    equation_refs: List[ObjectReference] = []
    image_refs: List[ObjectReference] = []

    for rel_id, rel in doc.part.rels.items():
        if rel.is_external:
            continue

        if rel.reltype == RT.OLE_OBJECT:
            target = equation_refs
        elif rel.reltype == RT.IMAGE:
            target = image_refs
        else:
            continue

        part = rel.target_part
        target.append(ObjectReference(
            identifier=rel_id,
            source=part,
            format=_part_format(part),
        ))

    equation_refs.sort(key=lambda ref: ref.identifier)
    image_refs.sort(key=lambda ref: ref.identifier)

    logger.debug(
        f"Collected {len(equation_refs)} equation and {len(image_refs)} image references"
    )
    return equation_refs, image_refs


__all__ = ['collect_references']
