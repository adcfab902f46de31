"""Tests for the command line entry point."""

from __future__ import annotations

import pytest

from cdp.config import CdpConfig
from cdp.main import KNOWN_VECTOR, parse_args, run, selftest


def _run(argv: list[str], cfg: CdpConfig | None = None) -> int:
    return run(parse_args(argv), cfg or CdpConfig())


class TestEncodeDecode:
    def test_encode_hex(self, capsys) -> None:
        assert _run(["encode", "74"]) == 0
        assert capsys.readouterr().out == "5aa6\n"

    def test_decode_hex(self, capsys) -> None:
        assert _run(["decode", "5a a6"]) == 0
        assert capsys.readouterr().out == "74\n"

    def test_encode_bits(self, capsys) -> None:
        assert _run(["encode", "74", "--bits"]) == 0
        assert capsys.readouterr().out == "01011010 10100110\n"

    def test_files(self, tmp_path) -> None:
        raw = tmp_path / "data.bin"
        enc = tmp_path / "data.cdp"
        dec = tmp_path / "data.out"
        raw.write_bytes(b"\x80\x00")
        assert _run(["encode", "--in", str(raw), "--out", str(enc)]) == 0
        assert enc.read_bytes() == b"\xaa\x6a\x55\x55"
        assert _run(["decode", "--in", str(enc), "--out", str(dec)]) == 0
        assert dec.read_bytes() == b"\x80\x00"

    def test_missing_input_file(self, tmp_path, caplog) -> None:
        assert _run(["encode", "--in", str(tmp_path / "missing.bin")]) == 1
        assert "encode failed" in caplog.text

    def test_strict_decode_fails(self, capsys, caplog) -> None:
        assert _run(["decode", "0000"]) == 1
        assert capsys.readouterr().out == ""
        assert "invalid symbol 00" in caplog.text

    def test_permissive_flag(self, capsys) -> None:
        assert _run(["decode", "--permissive", "0000"]) == 0
        assert capsys.readouterr().out == "00\n"

    def test_permissive_from_config(self, capsys) -> None:
        cfg = CdpConfig()
        cfg.codec.strict_symbols = False
        assert _run(["decode", "ffff"], cfg) == 0
        assert capsys.readouterr().out == "00\n"

    def test_odd_length(self, caplog) -> None:
        assert _run(["decode", "5aa699"]) == 1
        assert "must be even" in caplog.text

    def test_bad_hex(self, caplog) -> None:
        assert _run(["encode", "zz"]) == 1
        assert "bad input" in caplog.text

    def test_input_required(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["encode"])

    def test_input_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["encode", "74", "--in", "data.bin"])


class TestSelftest:
    def test_known_vector_constant(self) -> None:
        assert KNOWN_VECTOR == (b"\x74", b"\x5a\xa6")

    def test_selftest_passes(self, capsys) -> None:
        assert selftest(size=256, seed=1) is True
        out = capsys.readouterr().out
        assert "Input data:   01110100" in out
        assert "Encoded data: 01011010, 10100110" in out
        assert "TEST 0 Result - OK" in out
        assert "TEST 1 Result - OK (256 bytes)" in out

    def test_selftest_command_uses_config(self, capsys) -> None:
        cfg = CdpConfig()
        cfg.selftest.size = 32
        cfg.selftest.seed = 3
        assert _run(["selftest"], cfg) == 0
        assert "(32 bytes)" in capsys.readouterr().out

    def test_selftest_size_flag(self, capsys) -> None:
        assert _run(["selftest", "--size", "8", "--seed", "0"]) == 0
        assert "(8 bytes)" in capsys.readouterr().out
