"""Tests for the cascade demonstration script."""

import subprocess
import sys
from pathlib import Path

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "demo_cascade.py"


def run_demo(*args):
    return subprocess.run([sys.executable, str(SCRIPT), *args], capture_output=True, text=True)


def test_zero_steps_rejected():
    result = run_demo("--steps", "0")
    assert result.returncode == 2
    assert "--steps must be at least 1" in result.stderr
    assert "Demonstration failed" not in result.stderr


def test_zero_max_steps_rejected():
    result = run_demo("--max-steps", "0")
    assert result.returncode == 2
    assert "--max-steps must be at least 1" in result.stderr


def test_demo_run(tmp_path):
    log_file = tmp_path / "demo.log"
    result = run_demo("--log-file", str(log_file))

    assert result.returncode == 0, result.stderr
    assert "1656 discharges after 100 steps" in result.stdout
    assert "First full discharge at step 195" in result.stdout
    assert "First full discharge: step 195" in log_file.read_text()
