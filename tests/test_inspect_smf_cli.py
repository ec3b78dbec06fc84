"""CLI integration tests for tools/inspect_smf.py."""

from __future__ import annotations

import os
from pathlib import Path
import subprocess
import sys

import mido

REPO_ROOT = Path(__file__).resolve().parents[1]
SCRIPT = REPO_ROOT / "tools" / "inspect_smf.py"


def _run_cli(*args: str) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = str(REPO_ROOT)
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        cwd=str(REPO_ROOT),
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )


def _write_song(path: Path) -> Path:
    mid = mido.MidiFile(type=1, ticks_per_beat=480)
    conductor = mido.MidiTrack()
    conductor.append(mido.MetaMessage("set_tempo", tempo=500000, time=0))
    conductor.append(mido.MetaMessage("time_signature", numerator=4, denominator=4, time=0))
    mid.tracks.append(conductor)
    lead = mido.MidiTrack()
    lead.append(mido.Message("note_on", channel=0, note=69, velocity=127, time=0))
    lead.append(mido.Message("note_off", channel=0, note=69, velocity=0, time=480))
    mid.tracks.append(lead)
    mid.save(str(path))
    return path


def test_summary_table(tmp_path: Path) -> None:
    song = _write_song(tmp_path / "song.mid")
    result = _run_cli(str(song), "--check-mido")

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert lines[0].split() == ["File", "Fmt", "Tracks", "Division", "Tempos", "BPM", "TimeSigs", "Notes"]
    row = lines[2].split()
    assert row[1:] == ["1", "2", "480", "1", "120.00", "1", "1"]


def test_notes_and_schedule_listing(tmp_path: Path) -> None:
    song = _write_song(tmp_path / "song.mid")
    result = _run_cli(str(song), "--notes", "--schedule")

    assert result.returncode == 0, result.stderr
    assert "ch1  1 notes" in result.stdout
    assert "A4" in result.stdout
    assert "440.00 Hz" in result.stdout
    assert "0.500s" in result.stdout


def test_glob_pattern(tmp_path: Path) -> None:
    _write_song(tmp_path / "a.mid")
    _write_song(tmp_path / "b.mid")
    result = _run_cli(str(tmp_path / "*.mid"))

    assert result.returncode == 0, result.stderr
    assert len(result.stdout.splitlines()) == 4


def test_broken_file_reports_error(tmp_path: Path) -> None:
    broken = tmp_path / "broken.mid"
    broken.write_bytes(b"not a midi file")
    result = _run_cli(str(broken))

    assert result.returncode == 1
    assert "ERR" in result.stdout
    assert "no MThd signature" in result.stdout


def test_check_mido_reports_files_mido_cannot_read(tmp_path: Path) -> None:
    song = _write_song(tmp_path / "song.mid")
    prefixed = tmp_path / "prefixed.mid"
    prefixed.write_bytes(b"RIFFxxxx" + song.read_bytes())
    result = _run_cli(str(prefixed), str(song), "--check-mido")

    assert result.returncode == 1
    assert "Traceback" not in result.stderr
    assert "mido could not read file" in result.stderr
    lines = result.stdout.splitlines()
    assert len(lines) == 4
    assert lines[2].split()[1:] == ["1", "2", "480", "1", "120.00", "1", "1"]
    assert lines[3].split()[1:] == ["1", "2", "480", "1", "120.00", "1", "1"]


def test_no_matching_paths(tmp_path: Path) -> None:
    result = _run_cli(str(tmp_path / "missing-*.mid"))
    assert result.returncode == 2
    assert "No files matched" in result.stderr
