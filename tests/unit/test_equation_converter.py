import struct

import pytest

from conftest import make_ole_equation
from xgen_docx2table.core.exceptions import EquationConversionError, ResolutionError
from xgen_docx2table.core.functions import equation_converter
from xgen_docx2table.core.functions.equation_converter import (
    CallableEquationConverter,
    MTEFEquationConverter,
    NullEquationConverter,
    normalize_display_math,
)
from xgen_docx2table.core.functions.resolution import ObjectReference
from xgen_docx2table.core.processor.docx_helper import DOCXEquationProcessor


@pytest.mark.parametrize("latex, expected", [
    ("$$x^2$$", "[x^2]"),
    ("x^2", "x^2"),
    ("$$a$$ and $$b$$", "[a] and $$b$$"),
    ("$$open", "[open"),
    ("", ""),
])
def test_normalize_display_math(latex, expected):
    assert normalize_display_math(latex) == expected


def test_null_converter_fails():
    with pytest.raises(EquationConversionError):
        NullEquationConverter().convert(b"data")


def test_equation_conversion_error_is_resolution_error():
    assert issubclass(EquationConversionError, ResolutionError)


def test_callable_converter():
    converter = CallableEquationConverter(lambda data: data.decode().upper())
    assert converter.convert(b"abc") == "ABC"


class TestMTEFEquationConverter:
    def test_rejects_non_ole_data(self):
        converter = MTEFEquationConverter(lambda mtef: "unused")
        with pytest.raises(EquationConversionError):
            converter.convert(b"definitely not an OLE file")

    def test_reads_equation_native_stream(self):
        header = struct.pack('<IHIH', 28, 0x0200, 0, 0).ljust(28, b'\x00')
        mtef = b"\x03\x01\x01\x03\x00" + b"MTEF"
        received = []

        def mtef_to_latex(payload):
            received.append(payload)
            return "$$\\frac{a}{b}$$"

        latex = MTEFEquationConverter(mtef_to_latex).convert(make_ole_equation(header + mtef))

        assert latex == "$$\\frac{a}{b}$$"
        assert received[0].startswith(mtef)
        assert len(received[0]) == 4096 - 28

    def test_real_ole_without_equation_stream(self):
        data = make_ole_equation(struct.pack("<I", 28).ljust(32, b"\x00"), stream_name="Contents")
        with pytest.raises(EquationConversionError):
            MTEFEquationConverter(lambda mtef: "").convert(data)

    def _patch_ole(self, monkeypatch, streams):
        class FakeStream:
            def __init__(self, data):
                self._data = data

            def read(self):
                return self._data

        class FakeOle:
            closed = False

            def __init__(self, _fp):
                pass

            def exists(self, name):
                return name in streams

            def openstream(self, name):
                return FakeStream(streams[name])

            def close(self):
                FakeOle.closed = True

        class FakeOlefile:
            OleFileIO = FakeOle

            @staticmethod
            def isOleFile(_fp):
                return True

        monkeypatch.setattr(equation_converter, "olefile", FakeOlefile)
        return FakeOle

    def test_strips_equation_header(self, monkeypatch):
        header = struct.pack('<I', 28).ljust(28, b'\x00')
        fake_ole = self._patch_ole(monkeypatch, {"Equation Native": header + b"MTEF"})

        received = []

        def mtef_to_latex(mtef):
            received.append(mtef)
            return "$$y$$"

        assert MTEFEquationConverter(mtef_to_latex).convert(b"ole") == "$$y$$"
        assert received == [b"MTEF"]
        assert fake_ole.closed

    def test_missing_native_stream(self, monkeypatch):
        self._patch_ole(monkeypatch, {"CompObj": b"x"})
        with pytest.raises(EquationConversionError):
            MTEFEquationConverter(lambda mtef: "").convert(b"ole")

    def test_truncated_header(self, monkeypatch):
        self._patch_ole(monkeypatch, {"Equation Native": struct.pack('<I', 99)})
        with pytest.raises(EquationConversionError):
            MTEFEquationConverter(lambda mtef: "").convert(b"ole")


class TestDOCXEquationProcessor:
    def test_normalizes_delimiters(self):
        processor = DOCXEquationProcessor(CallableEquationConverter(lambda d: f"$${d.decode()}$$"))
        assert processor.resolve_reference(ObjectReference("rId5", source=b"x^2")) == "[x^2]"

    def test_default_converter_fails(self):
        with pytest.raises(EquationConversionError):
            DOCXEquationProcessor().resolve_reference(ObjectReference("rId5", source=b"x"))

    def test_wraps_converter_errors(self):
        def broken(data):
            raise KeyError("bad record")

        processor = DOCXEquationProcessor(CallableEquationConverter(broken))
        with pytest.raises(EquationConversionError) as exc_info:
            processor.resolve_reference(ObjectReference("rId5", source=b"x"))
        assert "rId5" in str(exc_info.value)

    def test_none_result_fails(self):
        processor = DOCXEquationProcessor(CallableEquationConverter(lambda d: None))
        with pytest.raises(EquationConversionError):
            processor.resolve_reference(ObjectReference("rId5", source=b"x"))
