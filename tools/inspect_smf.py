#!/usr/bin/env python3
"""Summarise Standard MIDI Files: header, tempo map, meter and notes.

Examples
--------
    python tools/inspect_smf.py song.mid
    python tools/inspect_smf.py "midi/**/*.mid" --notes
    python tools/inspect_smf.py song.mid --schedule --check-mido
"""

from __future__ import annotations

import argparse
import glob
import io
import logging
from pathlib import Path
import sys
from typing import Iterable, List

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import mido  # noqa: E402

from smf import Score, SmfError, decode, schedule  # noqa: E402


logger = logging.getLogger("inspect_smf")


def collect_paths(patterns: Iterable[str]) -> List[Path]:
    paths: List[Path] = []
    for pattern in patterns:
        matches = sorted(Path(p) for p in glob.glob(pattern, recursive=True))
        if matches:
            paths.extend(matches)
        else:
            # Treat literal path when glob finds nothing.
            candidate = Path(pattern)
            if candidate.exists():
                paths.append(candidate)
    seen: set[Path] = set()
    unique_paths: List[Path] = []
    for path in paths:
        resolved = path.resolve()
        if resolved not in seen:
            seen.add(resolved)
            unique_paths.append(path)
    return unique_paths


def mido_mismatches(data: bytes, score: Score) -> List[str]:
    """Compare header fields and the tempo map against mido's reading of `data`."""

    mid = mido.MidiFile(file=io.BytesIO(data))
    problems: List[str] = []
    header = score.header
    if mid.type != header.format:
        problems.append(f"format {header.format} != mido {mid.type}")
    if len(mid.tracks) != header.track_count:
        problems.append(f"track count {header.track_count} != mido {len(mid.tracks)}")
    if mid.ticks_per_beat != header.division:
        problems.append(f"division {header.division} != mido {mid.ticks_per_beat}")

    expected = []
    for track in mid.tracks:
        tick = 0
        for msg in track:
            tick += msg.time
            if msg.type == "set_tempo":
                expected.append((tick, round(mido.tempo2bpm(msg.tempo), 6)))
    ours = [(tempo.timing, round(tempo.bpm, 6)) for tempo in score.tempos]
    if ours != expected:
        problems.append(f"tempos {ours} != mido {expected}")
    return problems


def summary_row(path: Path, score: Score) -> List[str]:
    header = score.header
    first_bpm = f"{score.tempos[0].bpm:6.2f}" if score.tempos else "-"
    return [
        str(path),
        str(header.format),
        str(header.track_count),
        str(header.division),
        str(len(score.tempos)),
        first_bpm,
        str(len(score.time_signatures)),
        str(score.note_count),
    ]


def print_notes(score: Score) -> None:
    for channel, notes in enumerate(score.notes):
        if not notes:
            continue
        print(f"  ch{channel + 1:<2} {len(notes)} notes")
        for note in notes:
            print(
                f"    tick {note.timing:>7}  len {note.duration:>6}  "
                f"{note.name:<4} vel {note.velocity}"
            )


def print_schedule(score: Score) -> None:
    for item in schedule(score):
        print(
            f"  {item.start:9.3f}s - {item.end:9.3f}s  ch{item.channel + 1:<2} "
            f"{item.name:<4} {item.frequency:8.2f} Hz  gain {item.gain:.3f}"
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Show header, tempo, meter and note summaries for MIDI files."
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="File paths or glob patterns (quotes recommended for wildcards).",
    )
    parser.add_argument("--notes", action="store_true", help="List notes per channel")
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="List note start/end times in seconds",
    )
    parser.add_argument(
        "--check-mido",
        action="store_true",
        help="Cross-check header and tempo map against mido",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    targets = collect_paths(args.paths)
    if not targets:
        parser.error("No files matched the provided paths/patterns.")

    header = ["File", "Fmt", "Tracks", "Division", "Tempos", "BPM", "TimeSigs", "Notes"]
    rows: List[List[str]] = []
    decoded: List[tuple[Path, Score]] = []
    failures = 0
    for path in targets:
        data = path.read_bytes()
        try:
            score = decode(data)
        except SmfError as err:
            failures += 1
            rows.append([str(path), "ERR", str(err), "", "", "", "", ""])
            continue
        rows.append(summary_row(path, score))
        decoded.append((path, score))

        if args.check_mido:
            try:
                problems = mido_mismatches(data, score)
            except (OSError, EOFError, KeyError, ValueError) as err:
                # mido rejects inputs the decoder tolerates (e.g. leading bytes)
                problems = [f"mido could not read file: {err}"]
            for problem in problems:
                logger.warning("%s: %s", path, problem)
            failures += bool(problems)

    widths = [
        max(len(row[i]) for row in ([header] + rows))
        for i in range(len(header))
    ]

    def fmt_row(row: list[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row))

    print(fmt_row(header))
    print("  ".join("-" * w for w in widths))
    for row in rows:
        print(fmt_row(row))

    for path, score in decoded:
        if args.notes or args.schedule:
            print()
            print(path)
        if args.notes:
            print_notes(score)
        if args.schedule:
            print_schedule(score)

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
