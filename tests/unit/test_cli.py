"""
Module 07 - CLI Unit Tests
Tests for shield_cli/main.py and its subcommands.

Commands are run in-process through main(argv) and their stdout checked.
"""
import hashlib
import json

import pytest

from core.ledger.lookup import HttpLeafLookup
from core.schemas.errors import LookupUnavailableException
from shield_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    create_parser,
    main,
)


FIRST_LEAF = 2**32 - 1


@pytest.fixture
def leaves_file(tmp_path, sample_commitment):
    path = tmp_path / "leaves.json"
    path.write_text(json.dumps({str(FIRST_LEAF): sample_commitment}))
    return path


class TestParser:

    def test_no_command_is_an_error(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_convert_requires_bases(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["convert", "ff"])


class TestEncodingCommands:

    def test_convert(self, capsys):
        assert main(["convert", "ff", "--from", "hex", "--to", "dec"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "255"

    def test_convert_json(self, capsys):
        assert main(["convert", "255", "--from", "dec", "--to", "hex", "--json"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["value"] == "0xff"

    def test_convert_invalid_digits(self, capsys):
        assert main(["convert", "12", "--from", "bin", "--to", "dec"]) == EXIT_RUNTIME_ERROR
        assert "INVALID_ENCODING" in capsys.readouterr().err

    def test_pack(self, capsys):
        assert main(["pack", "0x1234", "-p", "8", "-n", "3"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.split() == ["0", "18", "52"]

    def test_pack_bare_hex(self, capsys):
        assert main(["pack", "1234", "--hex", "-p", "8", "--json"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out) == {"elements": ["18", "52"], "packing_size": 8}

    def test_pack_overflow(self, capsys):
        assert main(["pack", "0x123456", "-p", "8", "-n", "2"]) == EXIT_RUNTIME_ERROR
        assert "CAPACITY_EXCEEDED" in capsys.readouterr().err

    def test_unpack(self, capsys):
        assert main(["unpack", "18", "52", "-p", "8", "--hex"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "0x1234"


class TestHashingCommands:

    def test_hash(self, capsys, sample_fields):
        assert main(["hash", *sample_fields]) == EXIT_SUCCESS
        expected = hashlib.sha256(bytes.fromhex("1234abcdffff")).digest()[-27:]
        assert capsys.readouterr().out.strip() == "0x" + expected.hex()

    def test_leaf_index(self, capsys):
        assert main(["leaf-index", "3", "--depth", "3"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "6"

    def test_leaf_index_default_depth(self, capsys):
        assert main(["leaf-index", "0", "--json"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["leaf_index"] == FIRST_LEAF

    def test_leaf_index_tree_full(self, capsys):
        assert main(["leaf-index", "4", "--depth", "3"]) == EXIT_RUNTIME_ERROR
        assert "TREE_FULL" in capsys.readouterr().err


class TestVerifyCommand:

    def test_valid_commitment(self, capsys, leaves_file, sample_fields, sample_commitment):
        code = main([
            "verify", "--fields", *sample_fields,
            "--commitment", sample_commitment,
            "--count", "0",
            "--leaves", str(leaves_file),
        ])
        assert code == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "digest_ok: true" in out
        assert "onchain_ok: true" in out

    def test_corrupted_field(self, capsys, leaves_file, sample_fields, sample_commitment):
        code = main([
            "verify", "--fields", "0x1235", *sample_fields[1:],
            "--commitment", sample_commitment,
            "--count", "0",
            "--leaves", str(leaves_file),
            "--json",
        ])
        assert code == EXIT_VERIFICATION_FAILED
        summary = json.loads(capsys.readouterr().out)
        assert summary["digest_ok"] is False
        assert summary["onchain_ok"] is True

    def test_debug_lists_checks(self, capsys, leaves_file, sample_fields, sample_commitment):
        main([
            "verify", "--fields", *sample_fields,
            "--commitment", sample_commitment,
            "--count", "0",
            "--leaves", str(leaves_file),
            "--json", "--debug",
        ])
        summary = json.loads(capsys.readouterr().out)
        assert [c["check_id"] for c in summary["checks"]] == ["commitment_digest", "commitment_onchain"]

    def test_no_leaf_source(self, capsys, sample_fields, sample_commitment):
        code = main([
            "verify", "--fields", *sample_fields,
            "--commitment", sample_commitment,
            "--count", "0",
        ])
        assert code == EXIT_RUNTIME_ERROR
        assert "no leaf source" in capsys.readouterr().err

    def test_unreachable_ledger(self, capsys, monkeypatch, sample_fields, sample_commitment):
        def unreachable(self, index):
            raise LookupUnavailableException("ledger down", leaf_index=index)

        monkeypatch.setattr(HttpLeafLookup, "get_leaf", unreachable)

        code = main([
            "verify", "--fields", *sample_fields,
            "--commitment", sample_commitment,
            "--count", "0",
            "--ledger", "http://ledger.invalid",
        ])
        assert code == EXIT_RUNTIME_ERROR
        out = capsys.readouterr().out
        assert "onchain_ok: unknown" in out
        assert "LOOKUP_UNAVAILABLE" in out

    def test_nf_requires_three_fields(self, capsys, leaves_file, sample_commitment):
        code = main([
            "verify", "--nf", "--fields", "0x01", "0x02",
            "--commitment", sample_commitment,
            "--count", "0",
            "--leaves", str(leaves_file),
        ])
        assert code == EXIT_RUNTIME_ERROR


class TestConfigCommand:

    def test_show(self, capsys):
        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["shield"]["packing_size"] == 128
        assert shown["shield"]["tree_depth"] == 33

    def test_show_with_config_file(self, capsys, tmp_path):
        path = tmp_path / "shield.json"
        path.write_text(json.dumps({"shield": {"tree_depth": 3}}))

        assert main(["--config", str(path), "config", "--show"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["shield"]["tree_depth"] == 3

    def test_bad_config_file(self, capsys, tmp_path):
        path = tmp_path / "shield.json"
        path.write_text(json.dumps({"shield": {"packing_size": 7}}))

        assert main(["--config", str(path), "config", "--show"]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err
