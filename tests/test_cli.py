"""Tests for the scriptlab CLI."""

import json

import pytest

from scriptlab.cli import main, parse_args


def _write_script(path, pron="ax 0"):
    path.write_text(json.dumps({
        "items": [
            {"id": "0001", "sentences": [{"words": [
                {"grapheme": "a", "pronunciation": pron, "break": "syllable"},
                {"grapheme": "b", "pronunciation": "b iy 1", "break": "sentence"},
                {"grapheme": ".", "type": "punctuation", "break": "sentence"},
            ]}]},
        ]
    }))
    return path


def test_parse_mlf_defaults():
    args = parse_args(["mlf", "script.json"])
    assert args.command == "mlf"
    assert args.output == "mono.mlf"
    assert args.phone_map is None
    assert args.check is False
    assert args.fill_pron is False
    assert args.verbose is False


def test_parse_combine():
    args = parse_args(["combine", "script.json", "--segments", "phones", "--no-ignore-tone"])
    assert args.segments == "phones"
    assert args.output_dir == "./scriptlab-units"
    assert args.ignore_tone is False


def test_no_command_exits():
    with pytest.raises(SystemExit) as exc:
        parse_args([])
    assert exc.value.code == 1


class TestMain:
    def test_mlf_writes_output(self, tmp_path):
        script = _write_script(tmp_path / "script.json")
        out = tmp_path / "mono.mlf"
        main(["mlf", str(script), "--output", str(out)])
        assert out.read_text().splitlines()[:3] == ["#!MLF!#", '"*/0001.lab"', "sil"]

    def test_mlf_check_reports_errors(self, tmp_path, capsys):
        script = _write_script(tmp_path / "script.json", pron="qq 1")
        with pytest.raises(SystemExit) as exc:
            main(["mlf", str(script), "--check"])
        assert exc.value.code == 1
        assert "Invalid TTS phone[qq]" in capsys.readouterr().err
        assert not (tmp_path / "mono.mlf").exists()

    def test_missing_script(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["prosody", str(tmp_path / "nope.json")])
        assert exc.value.code == 1
        assert "file not found" in capsys.readouterr().err

    def test_prosody_prints_groups(self, tmp_path, capsys):
        script = _write_script(tmp_path / "script.json")
        main(["prosody", str(script)])
        out = capsys.readouterr().out
        assert "0001-1:" in out
        assert "a b ." in out

    def test_combine(self, tmp_path):
        script = _write_script(tmp_path / "script.json")
        seg_dir = tmp_path / "phones"
        seg_dir.mkdir()
        (seg_dir / "0001.txt").write_text("0.0 sil\n0.1 ax\n0.2 b\n0.3 iy\n0.4 sil\n")
        out_dir = tmp_path / "units"
        main(["combine", str(script), "--segments", str(seg_dir), "--output-dir", str(out_dir)])
        assert (out_dir / "0001.txt").read_text().splitlines() == [
            "0.00000 sil", "0.10000 ax", "0.20000 b+iy", "0.40000 sil",
        ]
