# xgen_docx2table/core/processor/docx_helper/docx_paragraph.py
"""
DOCX Paragraph Processing Utility

Classifies the runs of a paragraph and renders them with the resolved
image URIs / equation LaTeX.

- iter_run_elements: runs of a paragraph in document order, wrappers included
- classify_run: RunKind + the references the run carries
- render_run: text contributed by one run
- render_paragraph: text contributed by one paragraph

A run that carries several drawings or several OLE objects contributes only
the last one. Word writes one drawing/object per run; the rule makes the
output for malformed input deterministic.
"""
import logging
from dataclasses import dataclass
from typing import Iterator, List, Mapping, Tuple, Union

from docx.oxml.ns import qn
from docx.text.run import Run
from lxml import etree

from xgen_docx2table.core.functions.table_extractor import TableExtractorConfig
from xgen_docx2table.core.processor.docx_helper.docx_constants import (
    EMU_PER_PIXEL,
    NAMESPACES,
    RunKind,
)

logger = logging.getLogger("xgen_docx2table.docx.paragraph")

_R_ID = '{%s}id' % NAMESPACES['r']


@dataclass(frozen=True)
class InlineImage:
    """Inline drawing reference with its declared display size."""
    rel_id: str
    width: str
    height: str


@dataclass(frozen=True)
class EmbeddedObject:
    """OLE object reference."""
    rel_id: str


RunPayload = List[Union[InlineImage, EmbeddedObject]]


def _emu_to_px(value) -> str:
    try:
        return f"{int(value) // EMU_PER_PIXEL}px"
    except (TypeError, ValueError):
        return "auto"


# Inline wrappers whose runs belong to the paragraph text. w:ins / w:del
# (tracked changes) are not among them.
_RUN_CONTAINERS = frozenset({'hyperlink', 'smartTag', 'fldSimple', 'customXml'})


def iter_run_elements(para_elem) -> Iterator:
    """
    Yield the w:r elements of a paragraph in document order.

    Runs nested in hyperlinks, smart tags, simple fields, custom XML and
    inline content controls (w:sdt/w:sdtContent) are included, at any depth.
    """
    for child in para_elem:
        if not isinstance(child.tag, str):
            # comments, processing instructions
            continue
        qname = etree.QName(child)
        if qname.namespace != NAMESPACES['w']:
            continue

        local_tag = qname.localname
        if local_tag == 'r':
            yield child
        elif local_tag in _RUN_CONTAINERS:
            yield from iter_run_elements(child)
        elif local_tag == 'sdt':
            for content in child.findall('w:sdtContent', NAMESPACES):
                yield from iter_run_elements(content)


def _inline_images(run_elem) -> List[InlineImage]:
    images = []
    for inline in run_elem.findall('w:drawing/wp:inline', NAMESPACES):
        blip = inline.find('.//a:blip', NAMESPACES)
        if blip is None:
            # chart / diagram / shape
            continue

        rel_id = blip.get(qn('r:embed')) or blip.get(qn('r:link'))
        if not rel_id:
            continue

        extent = inline.find('wp:extent', NAMESPACES)
        cx = extent.get('cx') if extent is not None else None
        cy = extent.get('cy') if extent is not None else None
        images.append(InlineImage(rel_id, _emu_to_px(cx), _emu_to_px(cy)))
    return images


def _embedded_objects(run_elem) -> List[EmbeddedObject]:
    objects = []
    for ole in run_elem.findall('w:object/o:OLEObject', NAMESPACES):
        rel_id = ole.get(_R_ID)
        if rel_id:
            objects.append(EmbeddedObject(rel_id))
    return objects


def classify_run(run_elem) -> Tuple[RunKind, RunPayload]:
    """
    Classify a run.

    Order of precedence: inline image drawing, embedded equation object,
    plain text.

    Returns:
        (kind, payload) where payload lists the run's references
    """
    images = _inline_images(run_elem)
    if images:
        return RunKind.IMAGE, images

    objects = _embedded_objects(run_elem)
    if objects:
        return RunKind.EQUATION, objects

    return RunKind.TEXT, []


def render_run(
    run_elem,
    paragraph,
    equations: Mapping[str, str],
    images: Mapping[str, str],
    config: TableExtractorConfig,
) -> str:
    """
    Text contributed by one run.

    Args:
        run_elem: w:r element
        paragraph: python-docx Paragraph owning the run
        equations: Resolved rel_id -> LaTeX
        images: Resolved rel_id -> URI
        config: Markup settings
    """
    kind, payload = classify_run(run_elem)

    text = ""
    if kind == RunKind.IMAGE:
        for image in payload:
            uri = images.get(image.rel_id)
            if uri is None:
                logger.debug(f"No resolved image for {image.rel_id}")
                uri = config.placeholder
            text = config.image_tag_template.format(
                uri=uri, width=image.width, height=image.height
            )
    elif kind == RunKind.EQUATION:
        for obj in payload:
            latex = equations.get(obj.rel_id)
            if latex is None:
                logger.debug(f"No resolved equation for {obj.rel_id}")
                latex = config.placeholder
            text = latex
    else:
        text = Run(run_elem, paragraph).text

    return text


def render_paragraph(
    paragraph,
    equations: Mapping[str, str],
    images: Mapping[str, str],
    config: TableExtractorConfig,
) -> str:
    """Concatenate the rendered runs of a python-docx Paragraph."""
    return "".join(
        render_run(run_elem, paragraph, equations, images, config)
        for run_elem in iter_run_elements(paragraph._p)
    )


__all__ = [
    'InlineImage',
    'EmbeddedObject',
    'iter_run_elements',
    'classify_run',
    'render_run',
    'render_paragraph',
]
