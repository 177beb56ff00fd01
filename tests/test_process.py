"""Run the command in a real interpreter, including shutdown."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import streamcmp

SRC_DIR = Path(streamcmp.__file__).resolve().parent.parent


def _spawn(args: list[str]) -> subprocess.Popen:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    return subprocess.Popen(
        [sys.executable, "-m", "streamcmp", *args],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=env,
    )


def test_difference_exits_while_stdin_is_still_open(tmp_path: Path) -> None:
    other = tmp_path / "other"
    other.write_bytes(b"a")

    proc = _spawn(["-", str(other)])
    try:
        proc.stdin.write(b"X")
        proc.stdin.flush()
        status = proc.wait(timeout=30)
        stderr = proc.stderr.read().decode()
    finally:
        proc.stdin.close()
        proc.kill()
        proc.stdout.close()
        proc.stderr.close()

    assert status == 1
    assert f"- {other} differ: char 1" in stderr
    assert "Fatal Python error" not in stderr


def test_equal_input_from_stdin(tmp_path: Path) -> None:
    other = tmp_path / "other"
    other.write_bytes(b"hello\n")

    proc = _spawn([str(other), "-"])
    stdout, stderr = proc.communicate(b"hello\n", timeout=30)

    assert proc.returncode == 0
    assert stdout == b""
    assert stderr == b""


def test_silent_mode_still_reports_errors(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    proc = _spawn(["-s", "-", str(missing)])
    stdout, stderr = proc.communicate(b"hello", timeout=30)

    assert proc.returncode == 2
    assert f"failed to open {missing}" in stderr.decode()
