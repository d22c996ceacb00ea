import io

import pytest

from romdat.clrmamepro.reader import ClrMameProReader, MalformedLineError, RowType


def _rows(text: str, quotes: bool = True):
    reader = ClrMameProReader(io.BytesIO(text.encode("utf-8")), quotes=quotes)
    rows = []
    while reader.read_next_line():
        rows.append((
            reader.row_type,
            reader.top_level,
            reader.standalone,
            reader.internal_name,
            list(reader.internal),
            reader.current_line,
        ))
    return rows


@pytest.mark.unit
def test_classifies_multiline_block():
    rows = _rows('game (\n\tname "foo"\n\trom ( name "a.bin" size 16 )\n)\n')

    kinds = [row[0] for row in rows]
    assert kinds == [
        RowType.TOP_LEVEL,
        RowType.STANDALONE,
        RowType.INTERNAL,
        RowType.END_TOP_LEVEL,
    ]

    assert rows[0][1] == "game"
    assert rows[1][2] == ("name", "foo")
    assert rows[1][1] == "game"
    assert rows[2][3] == "rom"
    assert rows[2][4] == [("name", "a.bin"), ("size", "16")]
    assert rows[2][5] == 'rom ( name "a.bin" size 16 )'
    # top_level is cleared once the block ends
    assert rows[3][1] is None


@pytest.mark.unit
def test_single_line_block_yields_several_rows():
    rows = _rows('game ( name "foo" rom ( name "bar.bin" size 10 crc abcd1234 ) )')

    kinds = [row[0] for row in rows]
    assert kinds == [
        RowType.TOP_LEVEL,
        RowType.STANDALONE,
        RowType.INTERNAL,
        RowType.END_TOP_LEVEL,
    ]
    assert rows[2][4] == [("name", "bar.bin"), ("size", "10"), ("crc", "abcd1234")]


@pytest.mark.unit
def test_blank_and_comment_lines():
    rows = _rows("\n# a comment\n   \n")
    assert [row[0] for row in rows] == [RowType.NONE, RowType.COMMENT, RowType.NONE]


@pytest.mark.unit
def test_end_of_stream_flag():
    reader = ClrMameProReader(io.BytesIO(b'game (\n)\n'))
    assert reader.end_of_stream is False

    while reader.read_next_line():
        pass

    assert reader.end_of_stream is True
    assert reader.line_number == 2
    assert reader.row_type == RowType.NONE


@pytest.mark.unit
def test_standalone_value_with_spaces_unquoted():
    rows = _rows('game (\n\tdescription Some Game With Spaces\n)\n', quotes=False)
    assert rows[1][0] == RowType.STANDALONE
    assert rows[1][2] == ("description", "Some Game With Spaces")


@pytest.mark.unit
def test_quoted_parentheses_are_not_structural():
    rows = _rows('game (\n\tdescription "Alpha (World)"\n)\n')
    assert rows[1][0] == RowType.STANDALONE
    assert rows[1][2] == ("description", "Alpha (World)")


@pytest.mark.unit
def test_quote_escapes():
    rows = _rows('game (\n\tname "say \\"hi\\" C:\\\\roms"\n)\n')
    assert rows[1][2] == ("name", 'say "hi" C:\\roms')


@pytest.mark.unit
def test_quotes_disabled_keeps_quote_characters():
    rows = _rows('game (\n\trom ( name "foo bar.bin" size 1024 )\n)\n', quotes=False)
    internal = rows[1][4]
    assert internal[0] == ("name", '"foo')
    assert internal[1] == ('bar.bin"', "size")


@pytest.mark.unit
def test_trailing_key_without_value():
    rows = _rows('game (\n\trom ( name "a.bin" size )\n)\n')
    assert rows[1][4] == [("name", "a.bin"), ("size", "")]


@pytest.mark.unit
def test_unterminated_quote_is_malformed():
    rows = _rows('game (\n\tname "broken\n)\n')
    assert rows[1][0] == RowType.MALFORMED
    assert rows[1][5] == 'name "broken'
    assert rows[2][0] == RowType.END_TOP_LEVEL


@pytest.mark.unit
def test_unterminated_item_is_malformed():
    rows = _rows('game (\n\trom ( name "a.bin" size 1\n)\n')
    assert rows[1][0] == RowType.MALFORMED
    assert rows[1][5] == 'rom ( name "a.bin" size 1'


@pytest.mark.unit
def test_content_outside_block_is_malformed():
    rows = _rows('stray text here\n')
    assert rows == [(RowType.MALFORMED, None, None, None, [], "stray text here")]


@pytest.mark.unit
def test_missing_close_before_next_block():
    rows = _rows('game (\n\tname "a"\ngame (\n\tname "b"\n)\n')
    kinds = [row[0] for row in rows]
    assert kinds == [
        RowType.TOP_LEVEL,
        RowType.STANDALONE,
        RowType.END_TOP_LEVEL,
        RowType.TOP_LEVEL,
        RowType.STANDALONE,
        RowType.END_TOP_LEVEL,
    ]


@pytest.mark.unit
def test_top_level_name_is_lowercased():
    rows = _rows('GAME (\n)\n')
    assert rows[0][1] == "game"


@pytest.mark.unit
def test_byte_order_mark_and_crlf():
    reader = ClrMameProReader(io.BytesIO(b'\xef\xbb\xbfgame (\r\n\tname "foo"\r\n)\r\n'))
    assert reader.read_next_line()
    assert reader.row_type == RowType.TOP_LEVEL
    assert reader.top_level == "game"
    assert reader.read_next_line()
    assert reader.standalone == ("name", "foo")


@pytest.mark.unit
def test_text_stream_input():
    reader = ClrMameProReader(io.StringIO('game (\n)\n'))
    assert reader.read_next_line()
    assert reader.row_type == RowType.TOP_LEVEL


@pytest.mark.unit
def test_tokenize_unbalanced_quotes_raises():
    reader = ClrMameProReader(io.BytesIO(b""))
    with pytest.raises(MalformedLineError):
        reader.tokenize('name "open')
