import codecs

import pytest

from feedcore.charset import CharsetReader


@pytest.fixture
def reader():
    return CharsetReader()


def test_utf8_document_passes_through(reader):
    data = '<?xml version="1.0" encoding="utf-8"?><rss>é</rss>'.encode("utf-8")
    assert reader.to_utf8(data) == data


def test_latin1_document_is_converted(reader):
    data = '<?xml version="1.0" encoding="ISO-8859-1"?><rss>café</rss>'.encode("latin-1")
    converted = reader.to_utf8(data)
    assert converted == '<?xml version="1.0" encoding="utf-8"?><rss>café</rss>'.encode("utf-8")


def test_windows_1251_document_is_converted(reader):
    data = '<?xml version="1.0" encoding="windows-1251"?><rss>Привет</rss>'.encode("cp1251")
    assert "Привет".encode("utf-8") in reader.to_utf8(data)


def test_utf8_bom_is_removed(reader):
    data = codecs.BOM_UTF8 + b"<rss/>"
    assert reader.to_utf8(data) == b"<rss/>"


def test_utf16_document_is_converted(reader):
    data = '<?xml version="1.0" encoding="utf-16"?><rss>x</rss>'.encode("utf-16")
    assert reader.to_utf8(data) == b'<?xml version="1.0" encoding="utf-8"?><rss>x</rss>'


def test_unknown_encoding_raises_lookup_error(reader):
    with pytest.raises(LookupError):
        reader.to_utf8(b'<?xml version="1.0" encoding="x-no-such-charset"?><rss/>')


def test_control_bytes_are_stripped(reader):
    assert reader.to_utf8(b"<rss>a\x01b\x0bc\td</rss>") == b"<rss>abc\td</rss>"
