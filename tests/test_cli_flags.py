"""Tests for the epubwalk CLI."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from epubwalk.cli import main

SRC = str(Path(__file__).parent.parent / "src")


def run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "epubwalk", *args],
        capture_output=True,
        text=True,
        env={**os.environ, "PYTHONPATH": SRC, "COLUMNS": "200"},
    )


class TestHelp:
    """Tests for help and version output."""

    def test_help_lists_flags(self):
        result = run_cli("--help")
        assert result.returncode == 0
        for flag in ["--toc", "--spine", "--manifest", "--chapter", "--text"]:
            assert flag in result.stdout
        assert "--image-root" in result.stdout
        assert "--link-root" in result.stdout

    def test_version(self):
        result = run_cli("--version")
        assert result.returncode == 0
        assert "epubwalk" in result.stdout


class TestInspect:
    """Tests that run the CLI against a real file."""

    def test_metadata_and_toc(self, sample_epub_path):
        result = run_cli(str(sample_epub_path), "--toc", "--spine")
        assert result.returncode == 0
        assert "The Sample Book" in result.stdout
        assert "Chapter One" in result.stdout
        assert "chap2" in result.stdout

    def test_chapter_markup(self, sample_epub_path):
        result = run_cli(str(sample_epub_path), "--chapter", "chap1")
        assert result.returncode == 0
        assert "/images/cover-img/OEBPS/images/cover.png" in result.stdout
        assert "alert(1)" not in result.stdout

    def test_chapter_text(self, sample_epub_path):
        result = run_cli(str(sample_epub_path), "-c", "chap2", "--text")
        assert result.returncode == 0
        assert "The end." in result.stdout
        assert "<p>" not in result.stdout

    def test_text_requires_chapter(self, sample_epub_path):
        result = run_cli(str(sample_epub_path), "--text")
        assert result.returncode == 2
        assert "--text requires --chapter" in result.stderr

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "nope.epub")]) == 1

    def test_invalid_archive(self, tmp_path):
        bad = tmp_path / "bad.epub"
        bad.write_bytes(b"garbage")
        result = run_cli(str(bad))
        assert result.returncode == 1
        assert "Invalid/missing file" in result.stdout

    def test_unknown_chapter(self, sample_epub_path):
        assert main([str(sample_epub_path), "--chapter", "nope"]) == 1
