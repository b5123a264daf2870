from xgen_docx2table.core.processor.docx_helper import collect_references


def test_document_without_objects(docx_builder):
    docx_builder.add_table(1, 1).cell(0, 0).text = "plain"
    equation_refs, image_refs = collect_references(docx_builder.reload())

    assert equation_refs == []
    assert image_refs == []


def test_collects_images_and_equations(docx_builder, png_bytes):
    table = docx_builder.add_table(1, 2)
    image_id = docx_builder.add_picture(table.cell(0, 0).paragraphs[0], png_bytes)
    equation_id = docx_builder.add_ole_part(b"ole-payload")
    docx_builder.add_equation(table.cell(0, 1).paragraphs[0], equation_id)

    equation_refs, image_refs = collect_references(docx_builder.reload())

    assert [ref.identifier for ref in equation_refs] == [equation_id]
    assert [ref.identifier for ref in image_refs] == [image_id]
    assert equation_refs[0].read() == b"ole-payload"
    assert equation_refs[0].format == "bin"
    assert image_refs[0].read() == png_bytes
    assert image_refs[0].format == "png"


def test_objects_outside_tables_are_collected(docx_builder, png_bytes):
    body_paragraph = docx_builder.doc.add_paragraph()
    image_id = docx_builder.add_picture(body_paragraph, png_bytes)

    _, image_refs = collect_references(docx_builder.reload())
    assert [ref.identifier for ref in image_refs] == [image_id]


def test_same_picture_twice_shares_relationship(docx_builder, png_bytes):
    table = docx_builder.add_table(1, 2)
    first = docx_builder.add_picture(table.cell(0, 0).paragraphs[0], png_bytes)
    second = docx_builder.add_picture(table.cell(0, 1).paragraphs[0], png_bytes)

    _, image_refs = collect_references(docx_builder.reload())

    assert first == second
    assert len(image_refs) == 1
