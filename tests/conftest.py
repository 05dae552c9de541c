from __future__ import annotations

import base64
import json
import os
import subprocess
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

TINY_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGMAAQAABQABDQottAAAAABJRU5ErkJggg=="
)
FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

# Project directory mtimes (newest first: parked, shop_checkout, no_prompt).
MTIMES = {"parked": 1_700_000_300, "shop_checkout": 1_700_000_200, "no_prompt": 1_700_000_100}


def _clean_env() -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in {"PROJECTS_DIR", "STITCH_SAMPLE", "STITCH_PUBLIC_BASE_URL"}}
    env["PYTHONPATH"] = str(ROOT)
    return env


def run_stitch(args: list[str], *, check: bool = True, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """Run the stitch-mcp CLI and return the CompletedProcess."""
    return subprocess.run(
        [sys.executable, "-m", "stitch_mcp", *args],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=check,
        cwd=str(cwd or ROOT),
        env=_clean_env(),
    )


def run_stitch_json(args: list[str], *, cwd: Path | None = None) -> dict:
    """Run the CLI, parse stdout as JSON, and return it."""
    proc = run_stitch(args, cwd=cwd)
    return json.loads(proc.stdout)


def write_screen(project: Path, name: str, *, code: str | None = None, image: bytes | None = None) -> Path:
    screen = project / name
    screen.mkdir(parents=True)
    if code is not None:
        (screen / "code.html").write_text(code, encoding="utf-8")
    if image is not None:
        (screen / "screen.png").write_bytes(image)
    return screen


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    """
    A small on-disk catalog:

      parked/         prompt + two screens (one with an image)
      shop_checkout/  prompt + one screen with an image
      no_prompt/      no prompt.txt, one empty screen directory
      placeholder.png standalone asset (not a project)
    """
    root = tmp_path / "projects"
    root.mkdir()

    parked = root / "parked"
    parked.mkdir()
    (parked / "prompt.txt").write_text("  Track where my car is parked  \n", encoding="utf-8")
    write_screen(parked, "untitled_screen_1", code="<h1>Where is my car?</h1>", image=TINY_PNG)
    write_screen(parked, "untitled_screen_2", code="<h1>Saved</h1>")

    checkout = root / "shop_checkout"
    checkout.mkdir()
    (checkout / "prompt.txt").write_text("Single-page checkout with address + card", encoding="utf-8")
    write_screen(checkout, "checkout_a", code="<main>Checkout</main>", image=TINY_PNG)

    no_prompt = root / "no_prompt"
    no_prompt.mkdir()
    write_screen(no_prompt, "home")

    (root / "placeholder.png").write_bytes(TINY_PNG)

    # Set directory mtimes last; creating children bumps them.
    for name, ts in MTIMES.items():
        os.utime(root / name, (ts, ts))
    return root
