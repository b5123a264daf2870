import io
import struct
import threading

import pytest
from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.packuri import PackURI
from docx.opc.part import Part
from docx.oxml import parse_xml
from docx.shared import Emu
from PIL import Image

from xgen_docx2table.core.functions.img_processor import (
    ImageProcessor,
    ImageProcessorConfig,
    NamingStrategy,
)
from xgen_docx2table.core.functions.storage_backend import BaseStorageBackend, StorageType
from xgen_docx2table.core.processor.docx_helper.docx_constants import NAMESPACES

OLE_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.oleObject"


def make_png(width=4, height=4, color=(255, 0, 0)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


_SECTOR = 512
_FREESECT = 0xFFFFFFFF
_ENDOFCHAIN = 0xFFFFFFFE
_FATSECT = 0xFFFFFFFD
_NOSTREAM = 0xFFFFFFFF


def _dir_entry(name, entry_type, child=_NOSTREAM, start=_ENDOFCHAIN, size=0) -> bytes:
    encoded = name.encode("utf-16-le") + b"\x00\x00" if name else b""
    return struct.pack(
        "<64sHBBIII16sIQQIQ",
        encoded, len(encoded), entry_type, 1,
        _NOSTREAM, _NOSTREAM, child,
        b"\x00" * 16, 0, 0, 0, start, size,
    )


def make_ole_equation(native: bytes, stream_name: str = "Equation Native") -> bytes:
    """
    Minimal OLE compound file (v3, 512-byte sectors) holding one stream,
    "Equation Native" by default. The stream is padded to 4096 bytes so it
    lives in regular sectors rather than the mini stream.
    """
    stream_size = max(4096, len(native))
    stream = native.ljust(stream_size, b"\x00")
    stream = stream.ljust(-(-len(stream) // _SECTOR) * _SECTOR, b"\x00")
    n_stream = len(stream) // _SECTOR

    # sector 0: FAT, sector 1: directory, sectors 2..: stream
    fat = [_FATSECT, _ENDOFCHAIN]
    fat += [2 + i + 1 for i in range(n_stream - 1)] + [_ENDOFCHAIN]
    fat += [_FREESECT] * (_SECTOR // 4 - len(fat))

    header = struct.pack(
        "<8s16sHHHHH6sIIIIIIIII",
        b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", b"\x00" * 16,
        0x3E, 3, 0xFFFE, 9, 6, b"\x00" * 6,
        0, 1, 1, 0, 4096, _ENDOFCHAIN, 0, _ENDOFCHAIN, 0,
    )
    header += struct.pack("<109I", 0, *([_FREESECT] * 108))

    directory = (
        _dir_entry("Root Entry", 5, child=1)
        + _dir_entry(stream_name, 2, start=2, size=stream_size)
        + _dir_entry("", 0) * 2
    )
    return header + struct.pack(f"<{len(fat)}I", *fat) + directory + stream


class MemoryStorageBackend(BaseStorageBackend):
    """Keeps uploads in a dict and counts save() calls."""

    def __init__(self, base_url="https://cdn", fail=False):
        super().__init__(StorageType.LOCAL)
        self.base_url = base_url
        self.fail = fail
        self.objects = {}
        self.saves = 0
        self._lock = threading.Lock()

    def save(self, data, file_path):
        with self._lock:
            self.saves += 1
            if self.fail:
                return False
            self.objects[file_path] = data
        return True

    def delete(self, file_path):
        return self.objects.pop(file_path, None) is not None

    def exists(self, file_path):
        return file_path in self.objects

    def ensure_ready(self, directory_path):
        pass

    def build_url(self, file_path):
        return f"{self.base_url}/{file_path}"


class DocxBuilder:
    """Builds small Word documents with tables, pictures and OLE objects."""

    def __init__(self):
        self.doc = Document()
        self._ole_count = 0

    def add_table(self, rows, cols):
        return self.doc.add_table(rows=rows, cols=cols)

    def add_picture(self, paragraph, data=None, width=952500, height=476250) -> str:
        """Append an inline picture run; returns its relationship id."""
        run = paragraph.add_run()
        run.add_picture(io.BytesIO(data or make_png()), width=Emu(width), height=Emu(height))
        blip = run._r.find('.//a:blip', NAMESPACES)
        return blip.get('{%s}embed' % NAMESPACES['r'])

    def add_ole_part(self, data: bytes) -> str:
        """Add an embedded OLE part to the package; returns its relationship id."""
        self._ole_count += 1
        part = Part(
            PackURI(f"/word/embeddings/oleObject{self._ole_count}.bin"),
            OLE_CONTENT_TYPE,
            data,
            self.doc.part.package,
        )
        return self.doc.part.relate_to(part, RT.OLE_OBJECT)

    def add_equation(self, paragraph, rel_id: str, literal: str = "") -> None:
        """Append a run holding a w:object that points at rel_id."""
        text = f"<w:t>{literal}</w:t>" if literal else ""
        run = parse_xml(
            f'<w:r xmlns:w="{NAMESPACES["w"]}" xmlns:o="{NAMESPACES["o"]}" '
            f'xmlns:v="{NAMESPACES["v"]}" xmlns:r="{NAMESPACES["r"]}">'
            f'{text}'
            f'<w:object>'
            f'<v:shape id="_x0000_i1025" style="width:30pt;height:15pt"/>'
            f'<o:OLEObject Type="Embed" ProgID="Equation.3" ShapeID="_x0000_i1025" '
            f'DrawAspect="Content" ObjectID="_1" r:id="{rel_id}"/>'
            f'</w:object>'
            f'</w:r>'
        )
        paragraph._p.append(run)

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.doc.save(buf)
        return buf.getvalue()

    def reload(self):
        return Document(io.BytesIO(self.to_bytes()))


@pytest.fixture
def docx_builder():
    return DocxBuilder()


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def memory_backend():
    return MemoryStorageBackend()


@pytest.fixture
def image_processor(memory_backend):
    return ImageProcessor(
        storage_backend=memory_backend,
        config=ImageProcessorConfig(directory_path="", naming_strategy=NamingStrategy.UUID),
    )


@pytest.fixture
def hash_image_processor(memory_backend):
    return ImageProcessor(
        storage_backend=memory_backend,
        config=ImageProcessorConfig(directory_path="", naming_strategy=NamingStrategy.HASH),
    )
