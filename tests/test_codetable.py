"""
Tests for the dichotomic Morse table.
"""

import pytest

from morsendec import codetable
from morsendec.codetable import CodeTable, NotFound, morse_table, \
    TREETOP, TABLE_LEN, NOCHAR, WORDSPACE


def test_table_shape():
    assert len(morse_table) == TABLE_LEN == 127
    assert morse_table.character_at(TREETOP) == WORDSPACE
    # 52 characters plus the word space, '!' counted once
    assert len(morse_table.characters()) == 53


def test_positions():
    assert morse_table.lookup_position_of('E') == 32
    assert morse_table.lookup_position_of('T') == 96
    assert morse_table.lookup_position_of('A') == 48
    assert morse_table.lookup_position_of('N') == 80
    assert morse_table.lookup_position_of('5') == 2
    assert morse_table.lookup_position_of('0') == 126
    assert morse_table.lookup_position_of(' ') == TREETOP


def test_lookup_missing_character():
    with pytest.raises(NotFound):
        morse_table.lookup_position_of('%')
    # The placeholder for unassigned positions is not a character
    with pytest.raises(NotFound):
        morse_table.lookup_position_of(NOCHAR)
    # Lower case is the caller's job
    with pytest.raises(LookupError):
        morse_table.lookup_position_of('e')
    assert 'E' in morse_table
    assert '%' not in morse_table


def test_character_at_out_of_range():
    assert morse_table.character_at(0) == NOCHAR
    assert morse_table.character_at(128) == NOCHAR
    assert morse_table.character_at(1) == NOCHAR     # six dots


def test_tree_navigation():
    assert codetable.dot_child(TREETOP) == 32
    assert codetable.dash_child(TREETOP) == 96
    assert codetable.dot_child(32) == 16
    assert codetable.dash_child(32) == 48
    assert codetable.parent(32) == TREETOP
    assert codetable.parent(48) == 32
    assert codetable.parent(80) == 96
    assert codetable.parent(TREETOP) is None
    assert codetable.dot_child(1) is None
    assert codetable.dash_child(127) is None
    assert codetable.level_of(TREETOP) == 0
    assert codetable.level_of(96) == 1
    assert codetable.level_of(126) == 5
    assert codetable.level_of(1) == 6


def test_navigation_range_checked():
    with pytest.raises(ValueError):
        codetable.parent(0)
    with pytest.raises(ValueError):
        codetable.level_of(128)


def test_path_to():
    assert codetable.path_to(TREETOP) == ''
    assert codetable.path_to(32) == '.'
    assert codetable.path_to(96) == '-'
    assert codetable.path_to(48) == '.-'
    assert codetable.path_to(1) == '......'
    assert codetable.path_to(127) == '------'


def test_code_of():
    assert morse_table.code_of('A') == '.-'
    assert morse_table.code_of('B') == '-...'
    assert morse_table.code_of('Q') == '--.-'
    assert morse_table.code_of('0') == '-----'
    assert morse_table.code_of('?') == '..--..'
    assert morse_table.code_of('@') == '.--.-.'
    assert morse_table.code_of(' ') == ''


def test_duplicate_character_sends_first_position():
    assert morse_table.lookup_position_of('!') == 87
    assert morse_table.code_of('!') == '-.-.--'
    assert morse_table.character_of('---.') == '!'


def test_character_of():
    assert morse_table.character_of('...') == 'S'
    assert morse_table.character_of('--..--') == ','
    assert morse_table.character_of('') == WORDSPACE
    assert morse_table.character_of('......') == NOCHAR
    assert morse_table.character_of('.......') == NOCHAR
    assert morse_table.character_of('.x') == NOCHAR


def test_every_character_has_its_own_code():
    codes = {}
    for c in morse_table.characters():
        code = morse_table.code_of(c)
        assert code not in codes, "{} and {} share {}".format(c, codes.get(code), code)
        codes[code] = c
        assert morse_table.character_of(code) == c


def test_custom_table_checked():
    with pytest.raises(ValueError):
        CodeTable('*' * 126)
    with pytest.raises(ValueError):
        CodeTable('*' * 127)
    table = CodeTable('*' * 31 + 'X' + '*' * 31 + ' ' + '*' * 63)
    assert table.lookup_position_of('X') == 32
    assert table.character_of('.') == 'X'
