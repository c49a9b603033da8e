'''
Command line interface tests
'''

from io import StringIO

from maths.cli import CLI, join_continuations

from pytest import raises


def test_expression(capsys):
    assert CLI().run(args=['1 + 2']) == 0
    assert capsys.readouterr().out == '1 + 2 = 3\n'


def test_quiet(capsys):
    assert CLI().run(args=['-q', '0x1A', '1 / 4']) == 0
    assert capsys.readouterr().out == '26\n0.25\n'


def test_radixes(capsys):
    CLI().run(args=['-q', '-x', '26'])
    assert capsys.readouterr().out == '0x1a\n'
    CLI().run(args=['-q', '-b', '5.25'])
    assert capsys.readouterr().out == '0b101.01\n'


def test_non_finite_results(capsys):
    assert CLI().run(args=['-q', '-x', '1 / 0', '0 / 0', 'ln(0)']) == 0
    assert capsys.readouterr().out == 'inf\nnan\n-inf\n'


def test_conflicting_radixes():
    with raises(SystemExit):
        CLI().run(args=['-x', '-b', '1'])


def test_previous_answer(capsys):
    assert CLI().run(args=['-q', '2 * 3', 'ans + 1']) == 0
    assert capsys.readouterr().out == '6\n7\n'


def test_failure_does_not_stop_session(capsys):
    assert CLI().run(args=['-q', '5', 'x', 'ans + 1']) == 1
    captured = capsys.readouterr()
    assert captured.out == '5\n6\n'
    assert "Undeclared variable or constant: 'x'" in captured.err


def test_parse_error_highlight(capsys):
    assert CLI().run(args=['1 $ 2']) == 1
    captured = capsys.readouterr()
    assert '1 $ 2\n  ^\n' in captured.err
    assert "Invalid token: '$'" in captured.err


def test_file(capsys, tmp_path):
    source = tmp_path / 'maths.txt'
    source.write_text('1 + \\\n2\n\n3 * 3\n')
    assert CLI().run(args=['-q', '-f', str(source)]) == 0
    assert capsys.readouterr().out == '3\n9\n'


def test_file_and_expressions_conflict(tmp_path):
    source = tmp_path / 'maths.txt'
    source.write_text('1\n')
    with raises(SystemExit):
        CLI().run(args=['-f', str(source), '1 + 1'])


def test_stdin(capsys, monkeypatch):
    monkeypatch.setattr('sys.stdin', StringIO('1 + 1\n2 ** 3\n'))
    assert CLI().run(args=['-q']) == 0
    assert capsys.readouterr().out == '2\n8\n'


def test_join_continuations():
    lines = ['1 +\\\n', '2\n', 'sqrt(\\\n', '4)\n', '3\\']
    assert list(join_continuations(lines)) == ['1 +2', 'sqrt(4)', '3']


def test_dump(capsys):
    assert CLI().run(args=['-D', '1+x']) == 0
    assert capsys.readouterr().out.splitlines() == [
        '<kind>\t<repr(text)>\t<span>',
        "NUMBER\t'1'\t0..1",
        "PLUS\t'+'\t1..2",
        "IDENT\t'x'\t2..3",
        "EOF\t''\t3..4",
    ]


def test_raw_grammar(capsys):
    assert CLI().run(args=['-G']) == 0
    assert '(?<number>' in capsys.readouterr().out
