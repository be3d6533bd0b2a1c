"""
Unit tests for the parse/serialize engine.
"""

import pytest

from plainini import (
    IniDocument,
    IniEngine,
    MalformedInput,
    ParseMode,
    parse,
    serialize,
)


def test_parse_reference_text(ref_text: str, ref_doc: IniDocument) -> None:
    doc = parse(ref_text)

    assert doc == ref_doc
    assert set(doc.list_section_names()) == {'owner', 'database'}
    assert doc.get_value('owner', 'name') == 'John Doe'
    assert doc.get_value('database', 'port') == '143'
    assert doc.get_value('database', 'file') == '"payroll.dat"'


def test_comment_and_blank_lines_only() -> None:
    doc = parse('; just a comment\n\n   \n  ; [indented] = comment\n')
    assert len(doc) == 0


def test_comments_are_never_validated() -> None:
    doc = parse(';[broken\n;a == b\n[ok]\nk = v\n')
    assert doc == {'ok': {'k': 'v'}}


def test_whitespace_is_insignificant() -> None:
    doc = parse('  [  spaced  ]  \n\tkey\t=\tvalue  \n')
    assert doc == {'spaced': {'key': 'value'}}


def test_crlf_line_endings() -> None:
    doc = parse('[owner]\r\nname = John Doe\r\n')
    assert doc.get_value('owner', 'name') == 'John Doe'


def test_empty_section_is_kept() -> None:
    doc = parse('[empty]\n[full]\na = b\n')
    assert doc == {'empty': {}, 'full': {'a': 'b'}}


def test_reentering_a_section_merges_keys() -> None:
    doc = parse('[a]\nx = 1\n[b]\ny = 2\n[a]\nz = 3\n')
    assert doc.list_sections()['a'] == {'x': '1', 'z': '3'}


def test_duplicated_key_last_write_wins() -> None:
    doc = parse('[a]\nx = 1\nx = 2\n')
    assert doc.get_value('a', 'x') == '2'


@pytest.mark.parametrize('text, reason', [
    ('[1234.9;890]\n', 'reserved character in section name'),
    ('[]\n', 'empty section name'),
    ('[   ]\n', 'empty section name'),
    ('[a]\nserv==er = value\n', "more than one '='"),
    ('[a]\nport =\n', 'empty value'),
    ('[a]\n= 143\n', 'empty key'),
    ('[a]\nname  John Doe\n', "missing '='"),
    ('[a]\nfile = payroll;dat\n', 'reserved character in entry'),
    ('[a]\n[key] = value\n', 'reserved character in entry'),
    ('name = John Doe\n[owner]\n', 'entry outside any section'),
])
def test_strict_rejections(text: str, reason: str) -> None:
    with pytest.raises(MalformedInput) as exc:
        parse(text)
    assert exc.value.reason == reason


def test_malformed_input_carries_the_line() -> None:
    with pytest.raises(MalformedInput, match='line 3') as exc:
        parse('[owner]\nname = John Doe\nport =\n')
    assert exc.value.lineno == 3
    assert exc.value.line == 'port ='


def test_malformed_input_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse('[]')


def test_lenient_accepts_what_strict_rejects() -> None:
    text = '[a]\nserv==er = value\nport =\n'
    doc = parse(text, mode=ParseMode.LENIENT)
    assert doc.get_value('a', 'serv') == '=er = value'
    assert doc.get_value('a', 'port') == ''


def test_lenient_warns_on_reserved_characters() -> None:
    with pytest.warns(UserWarning, match='reserved character'):
        doc = parse('[1234.9;890]\nk = v\n', mode='lenient')
    assert doc.list_section_names() == ['1234.9;890']


@pytest.mark.parametrize('text', [
    '[a]\nname  John Doe\n',
    '[]\n',
    'name = John Doe\n',
    '[a]\n = value\n',
])
def test_lenient_still_rejects(text: str) -> None:
    with pytest.raises(MalformedInput):
        parse(text, mode=ParseMode.LENIENT)


def test_parse_into_merges(ref_text: str) -> None:
    doc = IniDocument({'owner': {'name': 'Jane Roe', 'email': 'j@x.org'}})
    ret = parse(ref_text, into=doc)

    assert ret is doc
    assert doc.get_value('owner', 'name') == 'John Doe'
    assert doc.get_value('owner', 'email') == 'j@x.org'
    assert doc.get_value('database', 'port') == '143'


def test_failed_parse_leaves_target_untouched() -> None:
    doc = IniDocument({'owner': {'name': 'Jane Roe'}})
    with pytest.raises(MalformedInput):
        parse('[owner]\nname = John Doe\n[new]\nbroken\n', into=doc)
    assert doc == {'owner': {'name': 'Jane Roe'}}


def test_engine_mode() -> None:
    engine = IniEngine('lenient')
    assert engine.mode is ParseMode.LENIENT
    assert not engine.strict
    assert IniEngine().strict
    with pytest.raises(ValueError):
        IniEngine('sloppy')


def test_serialize_format() -> None:
    doc = IniDocument({'owner': {'name': 'John Doe'}, 'db': {'port': '143'}})
    assert serialize(doc) == '[owner]\nname = John Doe\n\n[db]\nport = 143\n'
    assert doc.serialize(blank_lines=0) == (
        '[owner]\nname = John Doe\n[db]\nport = 143\n')
    assert str(doc) == serialize(doc)


def test_serialize_empty_document() -> None:
    assert serialize(IniDocument()) == ''


def test_round_trip(ref_doc: IniDocument) -> None:
    doc = IniDocument()
    doc.set_value('owner', 'name', 'John Doe')
    doc.set_value('database', 'file', '"payroll.dat"')
    doc.set_value('database', 'path', '/var/lib/app data')
    doc.setdefault('empty')

    assert parse(serialize(doc)) == doc
    assert parse(serialize(ref_doc)) == ref_doc


def test_serialize_parse_serialize_is_stable(ref_text: str) -> None:
    doc = parse(ref_text)
    first = serialize(doc)
    second = serialize(doc)
    assert parse(first) == parse(second) == doc
    assert serialize(parse(first)) == first


def test_lenient_warns_on_reserved_key() -> None:
    with pytest.warns(UserWarning, match='reserved character in key'):
        doc = parse('[a]\nk;x = v\n', mode=ParseMode.LENIENT)
    assert doc.get_value('a', 'k;x') == 'v'


@pytest.mark.parametrize('sep', ['\x0b', '\x0c', '\x1c', '\x85', '\u2028'])
def test_round_trip_keeps_unicode_separators(sep: str) -> None:
    doc = IniDocument()
    doc.set_value('a', 'k', f'x{sep}y')

    assert parse(serialize(doc)) == doc
    assert parse(f'[a]\nk = x{sep}y\n').get_value('a', 'k') == f'x{sep}y'


def test_only_cr_lf_end_lines() -> None:
    doc = parse('[a]\rx = 1\r\ny = 2\nz = 3')
    assert doc == {'a': {'x': '1', 'y': '2', 'z': '3'}}
