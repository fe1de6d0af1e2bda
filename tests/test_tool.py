"""Tests for the cobs command line tool."""

import pytest

from cobsio.tool import CobsTool


@pytest.fixture(autouse=True)
def no_format_env(monkeypatch):
    monkeypatch.delenv("COBS_FORMAT", raising=False)


def test_size(capsys):
    assert CobsTool.main(["size", "254"]) == 0
    assert capsys.readouterr().out.strip() == "257"

    CobsTool.main(["size", "-n", "254"])
    assert capsys.readouterr().out.strip() == "256"


def test_size_negative():
    with pytest.raises(SystemExit):
        CobsTool.main(["size", "-1"])


def test_encode_hex(capsys):
    assert CobsTool.main(["-f", "hex", "encode", "11 22 00 33"]) == 0
    assert capsys.readouterr().out.strip() == "03 11 22 02 33 00"


def test_encode_hex_no_delim_alias(capsys):
    CobsTool.main(["-f", "hex", "enc", "-n", "0x11,0x22,0x33,0x44"])
    assert capsys.readouterr().out.strip() == "05 11 22 33 44"


def test_decode_hex(capsys):
    CobsTool.main(["-f", "hex", "decode", "031122023300"])
    assert capsys.readouterr().out.strip() == "11 22 00 33"


def test_decode_inplace_hex(capsys):
    CobsTool.main(["--format", "hex", "dec", "--inplace", "02 45 01 04 2C 4C 79 01 05 40 06 4F 37"])
    assert capsys.readouterr().out.strip() == "45 00 00 2C 4C 79 00 00 40 06 4F 37"


def test_format_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("COBS_FORMAT", "hex")
    CobsTool.main(["encode", "-n", "00"])
    assert capsys.readouterr().out.strip() == "01 01"


def test_bad_format_from_environment(monkeypatch):
    monkeypatch.setenv("COBS_FORMAT", "base64")

    with pytest.raises(SystemExit):
        CobsTool.main(["encode", "00"])


def test_raw_files_round_trip(tmp_path):
    payload = bytes(range(256)) * 3
    src = tmp_path / "payload.bin"
    enc = tmp_path / "payload.cobs"
    dec = tmp_path / "payload.out"
    src.write_bytes(payload)

    CobsTool.main(["encode", "-i", str(src), "-o", str(enc)])
    encoded = enc.read_bytes()
    assert encoded[-1] == 0
    assert 0 not in encoded[:-1]

    CobsTool.main(["decode", "-i", str(enc), "-o", str(dec)])
    assert dec.read_bytes() == payload


def test_raw_text_argument(tmp_path):
    out = tmp_path / "out.bin"
    CobsTool.main(["encode", "-n", "hello", "-o", str(out)])
    assert out.read_bytes() == b"\x06hello"


def test_verbose(capsys):
    CobsTool.main(["-v", "-f", "hex", "encode", "11 22 33"])
    err = capsys.readouterr().err
    assert "encode: 3 -> 5 bytes" in err


def test_decode_too_short():
    with pytest.raises(SystemExit) as exc:
        CobsTool.main(["-f", "hex", "decode", "01"])

    assert "too small" in str(exc.value.code)


def test_decode_warns_on_zero_inside_stream(capsys):
    with pytest.warns(UserWarning, match="unexpected zero"):
        CobsTool.main(["-f", "hex", "decode", "02 11 00 02 22"])

    assert capsys.readouterr().out.strip() == "11 00 00 22"


def test_bad_hex():
    with pytest.raises(SystemExit) as exc:
        CobsTool.main(["-f", "hex", "encode", "zz"])

    assert "bad hex" in str(exc.value.code)


def test_data_and_input_conflict(tmp_path):
    src = tmp_path / "in.bin"
    src.write_bytes(b"x")

    with pytest.raises(SystemExit):
        CobsTool.main(["encode", "abc", "-i", str(src)])
