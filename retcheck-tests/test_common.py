import pytest

from retcheck import common


def test_location_line_and_column(source):
    source_file = source('abc\ndef\nghi')
    location = common.Location(source_file, 5, 4)     # 'ef\ng'
    assert location.get_line_column_string().endswith(':2,1...3,1')
    assert location.get_source() == ('d', 'ef\ng', 'hi')
    assert location.end == 9
    assert not location.is_empty()
    assert common.Location(source_file, 5, 0).is_empty()


def test_location_past_end_of_file(source):
    location = common.Location(source('abc'), 2, 10)
    with pytest.raises(OSError):
        location.get_source()
    assert location.get_line_column_string().endswith(':1,2...1,12')


def test_location_equality(source):
    first = source('abc')
    second = source('abc')
    assert common.Location(first, 1, 2) == common.Location(first, 1, 2)
    assert common.Location(first, 1, 2) != common.Location(first, 1, 1)
    assert common.Location(first, 1, 2) != common.Location(second, 1, 2)
    assert common.Location(first, 1, 2) != (1, 2)
    assert len({common.Location(first, 1, 2),
                common.Location(first, 1, 2)}) == 1


def test_bad_locations(source):
    with pytest.raises(AssertionError):
        common.Location(source('abc'), -1, 2)
    with pytest.raises(AssertionError):
        common.Location(source('abc'), 1, -2)


def test_messager_verbosity(capsys):
    messager = common.Messager(1)
    assert messager(0, 'a')
    assert messager(1, 'b')
    assert not messager(2, 'c')
    assert capsys.readouterr() == ('', 'a\nb\n')


def test_messager_prefix_and_indent(capsys):
    parent = common.Messager(0)
    child = parent.with_prefix('file.groovy')

    with child.indented(0, 'checking'):
        child(0, 'inside')
        with child.indented(1, 'not printed'):
            child(0, 'still inside')
    child(0, 'outside')

    assert capsys.readouterr().err == (
        'file.groovy: checking\n'
        '  file.groovy: inside\n'
        '  file.groovy: still inside\n'
        'file.groovy: outside\n')


def test_location_needs_a_source_file():
    with pytest.raises(AssertionError):
        common.Location('not a source file', 0, 1)
