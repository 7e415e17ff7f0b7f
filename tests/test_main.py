import io

import pytest

from main import USAGE, main
from test_torrent import SINGLE_FILE, SINGLE_FILE_HASH


def run(*argv):
    out = io.StringIO()
    status = main(list(argv), out=out)
    return status, out.getvalue()


@pytest.mark.parametrize("encoded, expected", [
    ("5:mango", '"mango"'),
    ("i52e", "52"),
    ("le", "[]"),
    ("l5:grapei935ee", '["grape",935]'),
    ("lli972e9:blueberryee", '[[972,"blueberry"]]'),
    ("de", "{}"),
    ("d5:grapei935ee", '{"grape":935}'),
])
def test_decode_command(encoded, expected):
    assert run("decode", encoded) == (0, expected + "\n")


def test_usage_when_arguments_missing():
    assert run() == (1, USAGE + "\n")
    assert run("decode") == (1, USAGE + "\n")


def test_usage_for_unknown_command():
    assert run("peers", "x") == (1, USAGE + "\n")


def test_unsupported_tag_diagnostic():
    assert run("decode", "l5:grapexe") == (1, "Not Supported data type.\n")


def test_malformed_input_fails(capsys):
    status, output = run("decode", "5:mang")
    assert status == 1
    assert output == ""
    assert "String length exceeds remaining data" in capsys.readouterr().err


def test_duplicate_key_option():
    assert run("decode", "d3:foo1:a3:foo1:be")[0] == 1
    assert run("decode", "--duplicate-keys", "keep-last", "d3:foo1:a3:foo1:be") == (0, '{"foo":"b"}\n')


def test_info_command(tmp_path):
    path = tmp_path / "single.torrent"
    path.write_bytes(SINGLE_FILE)
    status, output = run("info", str(path))
    assert status == 0
    assert output == (
        "Tracker URL: http://tracker.example/announce\n"
        "Length: 999\n"
        f"Info Hash: {SINGLE_FILE_HASH}"
    )


def test_info_details(tmp_path):
    path = tmp_path / "single.torrent"
    path.write_bytes(SINGLE_FILE)
    status, output = run("info", "--details", str(path))
    assert status == 0
    assert output.startswith(f"Tracker URL: http://tracker.example/announce\nLength: 999\nInfo Hash: {SINGLE_FILE_HASH}\n")
    assert "Torrent Details" in output
    assert "test.txt" in output


def test_info_missing_field(tmp_path, capsys):
    path = tmp_path / "bad.torrent"
    path.write_bytes(b"d8:announce3:urle")
    assert run("info", str(path)) == (1, "")
    assert "info" in capsys.readouterr().err


def test_info_missing_file(tmp_path):
    assert run("info", str(tmp_path / "nope.torrent"))[0] == 1


def test_info_truncated_read(tmp_path):
    path = tmp_path / "single.torrent"
    path.write_bytes(SINGLE_FILE)
    assert run("info", "--max-size", "20", str(path))[0] == 1


def test_info_details_with_odd_files_field(tmp_path):
    path = tmp_path / "odd.torrent"
    path.write_bytes(b"d8:announce3:url4:infod6:lengthi9e5:filesi1eee")
    status, output = run("info", "--details", str(path))
    assert status == 0
    assert output.startswith("Tracker URL: url\nLength: 9\n")
    assert "Torrent Details" in output


@pytest.mark.parametrize("argv", [
    ("decode", "--strict"),
    ("info", "--max-size", "big"),
    ("decode", "i1e", "extra"),
])
def test_bad_arguments_print_usage(argv):
    assert run(*argv) == (1, USAGE + "\n")
