import json
from pathlib import Path

import pytest

from ocminus.__main__ import main

PROGRAMS = Path(__file__).parent / 'suites' / 'core'


def test_eval(capsys):
    main(['eval', '3 + 4 * 2'])
    assert capsys.readouterr().out.strip() == '11'


def test_eval_boolean(capsys):
    main(['eval', 'not (1 < 2)'])
    assert capsys.readouterr().out.strip() == 'false'


def test_exec(capsys):
    main(['exec', str(PROGRAMS / 'program_2.ocm')])
    assert capsys.readouterr().out.strip() == '7'


def test_lex(capsys):
    main(['lex', 'f (x+1)'])
    assert capsys.readouterr().out.split() == ['.f.', '.(.', '.x.', '.+.', '.1.', '.).']


def test_lexpgm(capsys):
    main(['lexpgm', str(PROGRAMS / 'program_6.ocm')])
    assert capsys.readouterr().out.split() == ['.h.', '.1.', '.;.', '.;.']


def test_parse(capsys):
    main(['parse', '- x'])
    assert json.loads(capsys.readouterr().out) == {
        "type": "Unop", "op": "Neg", "operand": {"type": "Var", "name": "x"},
    }


def test_parsepgm(capsys):
    main(['parsepgm', str(PROGRAMS / 'program_1.ocm')])
    obj = json.loads(capsys.readouterr().out)
    assert obj["type"] == "Program"
    assert obj["fundefs"] == []
    assert obj["main"]["op"] == "Plus"


def test_parse_error_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['eval', '1 < 2 < 3'])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith('Parse error: expected EOF')


def test_runtime_error_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['exec', str(PROGRAMS / 'program_6.ocm')])
    assert excinfo.value.code == 1
    assert "UndefinedFunction: function 'h' called but not defined" in capsys.readouterr().err


def test_missing_file(capsys):
    with pytest.raises(SystemExit):
        main(['exec', 'does/not/exist.ocm'])
    assert 'not found' in capsys.readouterr().err


def test_verbose_eval_traces_to_stderr(capsys):
    main(['-v', 'eval', '1 + 1'])
    captured = capsys.readouterr()
    assert captured.out.strip() == '2'
    assert 'result: V_Int 2' in captured.err


def test_debug_file(tmp_path, capsys):
    trace = tmp_path / 'trace.txt'
    main(['-vv', '--debug-file', str(trace), 'exec', str(PROGRAMS / 'program_2.ocm')])
    assert 'call f(3, 4)' in trace.read_text(encoding='utf-8').splitlines()


def test_suites(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['test', str(Path(__file__).parent / 'suites')])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == '13 passed, 0 failed'


def test_suites_keep_going_past_bad_files(tmp_path, capsys):
    core = tmp_path / 'core'
    core.mkdir()
    (core / 'a.ocm').write_text('1 ;;\n', encoding='utf-8')
    (core / 'b.ocm').write_text('(*!tests!\n * {"output": ["7"]}\n *)\n3 + 4 ;;\n', encoding='utf-8')
    (core / 'loop.ocm').write_text(
        '(*!tests!\n * {"output": ["0"]}\n *)\nletrec loop n = loop n ;; loop 0 ;;\n', encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main(['test', str(tmp_path)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert 'Bad test spec:' in captured.err
    assert 'expected 0, got RecursionError' in captured.out
    assert captured.out.strip().endswith('1 passed, 1 failed')


def test_missing_suite_directory(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['test', 'does/not/exist'])
    assert excinfo.value.code == 1
    assert 'Error: directory does/not/exist not found' in capsys.readouterr().err


def test_exec_rejects_invalid_utf8(tmp_path, capsys):
    program = tmp_path / 'latin1.ocm'
    program.write_bytes(b'(* caf\xe9 *) 1 ;;\n')
    with pytest.raises(SystemExit) as excinfo:
        main(['exec', str(program)])
    assert excinfo.value.code == 1
    assert 'not valid UTF-8' in capsys.readouterr().err
