"""Tests for the intl-locale command line interface."""

from __future__ import annotations

import json

import pytest

from intl_locale.cli.negotiate import EXIT_INVALID, build_parser, main


def _stdout_json(capsys):
    return json.loads(capsys.readouterr().out)


class TestValidate:
    def test_all_valid(self, capsys):
        assert main(["validate", "en-US", "x-priv"]) == 0
        assert _stdout_json(capsys) == {"en-US": True, "x-priv": True}

    def test_invalid_exit_code(self, capsys):
        assert main(["validate", "en", "en-fonipa-fonipa"]) == EXIT_INVALID
        assert _stdout_json(capsys) == {"en": True, "en-fonipa-fonipa": False}


class TestCanonicalize:
    def test_canonical_deduplicated(self, capsys):
        assert main(["canonicalize", "EN-us", "en-US", "Zh-NAN-haNS-bu"]) == 0
        assert _stdout_json(capsys) == ["en-US", "nan-Hans-MM"]

    def test_invalid_tag(self, capsys):
        assert main(["canonicalize", "de", "wrong-tag"]) == EXIT_INVALID
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error: invalid language tag: wrong-tag" in captured.err


class TestResolve:
    def test_extension_keys(self, capsys):
        assert main(["resolve", "th-TH-u-ca-gregory", "--matcher", "lookup", "--keys", "ca"]) == 0
        assert _stdout_json(capsys) == {
            "locale": "th-TH-u-ca-gregory",
            "dataLocale": "th-TH",
            "extensions": {"ca": "gregory"},
        }

    def test_option_override(self, capsys):
        argv = ["resolve", "ja-JP", "--matcher", "lookup", "--keys", "ca", "--option", "ca=japanese"]
        assert main(argv) == 0
        assert _stdout_json(capsys) == {"locale": "ja-JP", "dataLocale": "ja-JP", "extensions": {"ca": "japanese"}}

    def test_default_locale(self, capsys):
        assert main(["resolve", "sw", "--default-locale", "fr"]) == 0
        assert _stdout_json(capsys)["locale"] == "fr"

    def test_malformed_option(self, capsys):
        assert main(["resolve", "en", "--option", "ca"]) == EXIT_INVALID
        assert "KEY=VALUE" in capsys.readouterr().err

    def test_unknown_key(self, capsys):
        assert main(["resolve", "en", "--keys", "zz"]) == EXIT_INVALID
        assert "zz" in capsys.readouterr().err


class TestListCommands:
    def test_supported(self, capsys):
        assert main(["supported", "de-AT", "sw", "--matcher", "lookup"]) == 0
        assert _stdout_json(capsys) == ["de-AT"]

    def test_prioritize(self, capsys):
        assert main(["prioritize", "pt-AO"]) == 0
        assert _stdout_json(capsys) == ["pt", "pt-BR", "pt-PT"]


class TestParser:
    def test_keys_split(self):
        args = build_parser().parse_args(["resolve", "en", "--keys", "CA, nu,"])
        assert args.keys == ["ca", "nu"]

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_data_dir(self, temp_dir, capsys):
        assert main(["--data-dir", str(temp_dir), "canonicalize", "en"]) == EXIT_INVALID
        assert "error:" in capsys.readouterr().err
