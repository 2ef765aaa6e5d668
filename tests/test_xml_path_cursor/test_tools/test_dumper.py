"""Tests for the structural dump and its fingerprint parser."""

import io

import pytest
from lxml import etree

from xml_path_cursor.navigation import PathCursor
from xml_path_cursor.shared import CursorConfig
from xml_path_cursor.tools import StructureEntry, dump, dump_to_string, parse_dump

CATALOG = '<catalog id="1"><book><title>Dune!</title><note/></book></catalog>'

CATALOG_DUMP = (
    '<catalog a="1">\n'
    ' <book>\n'
    '  <title>5</title>\n'
    '  <note/>\n'
    ' </book>\n'
    '</catalog>\n'
)

LIBRARY = (
    '<lib version="1">'
    '<shelf id="s1" floor="2"><book><title>Dune</title><author>Herbert</author></book></shelf>'
    '<shelf/>'
    '<misc><note>n</note><note>  </note></misc>'
    '</lib>'
)


def _fingerprint(document):
    """Structure of ``document`` as seen by a full tree parse."""
    root = etree.fromstring(document)
    return [
        StructureEntry(
            depth=len(list(el.iterancestors())) + 1,
            name=el.tag,
            attribute_count=len(el.attrib),
            text_length=None if len(el) else len(el.text or ""),
        )
        for el in root.iter()
    ]


class TestDump:
    """Test dump output."""

    def test_catalog(self):
        out = io.StringIO()
        with PathCursor.open(CATALOG) as cursor:
            assert dump(cursor, out) == 4
        assert out.getvalue() == CATALOG_DUMP

    def test_dump_to_string(self):
        assert dump_to_string(CATALOG) == CATALOG_DUMP

    def test_default_output_is_stdout(self, capsys):
        with PathCursor.open("<a>hi</a>") as cursor:
            dump(cursor)
        assert capsys.readouterr().out == "<a>2</a>\n"

    def test_mixed_content_reports_children_only(self):
        assert dump_to_string("<a>pre<b>x</b>post</a>") == "<a>\n <b>1</b>\n</a>\n"

    def test_whitespace_between_elements(self):
        assert dump_to_string("<r>\n  <a>1</a>\n</r>") == "<r>\n <a>1</a>\n</r>\n"

    def test_custom_margin(self):
        assert dump_to_string(CATALOG, margin="..") == (
            '<catalog a="1">\n'
            '..<book>\n'
            '....<title>5</title>\n'
            '....<note/>\n'
            '..</book>\n'
            '</catalog>\n'
        )

    def test_empty_document(self):
        assert dump_to_string("") == ""

    def test_small_buffer_gives_same_dump(self):
        assert dump_to_string(LIBRARY, CursorConfig(buffer_size=3)) == dump_to_string(LIBRARY)


class TestParseDump:
    """Test re-deriving structure from dump text."""

    def test_parse_catalog(self):
        assert parse_dump(CATALOG_DUMP) == [
            StructureEntry(1, "catalog", 1, None),
            StructureEntry(2, "book", 0, None),
            StructureEntry(3, "title", 0, 5),
            StructureEntry(3, "note", 0, 0),
        ]

    def test_dump_agrees_with_tree_parse(self):
        assert parse_dump(dump_to_string(LIBRARY)) == _fingerprint(LIBRARY)

    def test_custom_margin(self):
        text = dump_to_string(LIBRARY, margin="\t")
        assert parse_dump(text, margin="\t") == _fingerprint(LIBRARY)

    def test_invalid_line(self):
        with pytest.raises(ValueError, match="Line 2 is not in dump format"):
            parse_dump("<a>\ngarbage\n</a>\n")

    def test_empty_margin(self):
        with pytest.raises(ValueError, match="margin"):
            parse_dump(CATALOG_DUMP, margin="")
