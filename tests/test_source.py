from pathlib import Path

import pytest

from simulator.source import FileSourceProvider, TextSourceProvider, extract_initial_tape

PROGRAMS = Path(__file__).resolve().parent.parent / "programs"


def test_extract_initial_tape_from_comment():
    text = "; Adds one\n; $INITIAL_TAPE: 1011\n0 * * r 0\n"
    assert extract_initial_tape(text) == "1011"


def test_extract_initial_tape_without_colon_or_spaces():
    assert extract_initial_tape("0 1 1 r 0 ; $INITIAL_TAPE111") == "111"


def test_extract_initial_tape_first_match_wins():
    text = "; $INITIAL_TAPE: abc\r\n; $INITIAL_TAPE: def\r\n"
    assert extract_initial_tape(text) == "abc"


def test_extract_initial_tape_requires_comment():
    assert extract_initial_tape("$INITIAL_TAPE: 101\n") is None
    assert extract_initial_tape("0 1 1 r 0\n") is None


def test_text_provider_explicit_tape_overrides_directive():
    source = TextSourceProvider("; $INITIAL_TAPE: 1\n", initial_tape="0").load()
    assert source.initial_tape == "0"
    assert TextSourceProvider("; $INITIAL_TAPE: 1\n").load().initial_tape == "1"


def test_file_provider_reads_bundled_program():
    source = FileSourceProvider(PROGRAMS / "binary_increment.txt").load()
    assert source.name == "binary_increment"
    assert source.initial_tape == "1011"
    assert "0 _ _ l 1" in source.text


def test_file_provider_adds_txt_suffix(tmp_path):
    (tmp_path / "loop.txt").write_text("0 * * r 0\n", encoding="utf-8")
    source = FileSourceProvider(tmp_path / "loop").load()
    assert source.name == "loop"
    assert source.initial_tape is None


def test_file_provider_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileSourceProvider(tmp_path / "missing").load()
