"""Tests for cli.py - exit codes and error reporting."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from arbgen.cli import main

type ArbWriter = Callable[[str, dict[str, object] | str], Path]


class TestMain:
    """arbgen command."""

    def test_success(self, tmp_path: Path, write_arb: ArbWriter) -> None:
        """A valid project exits 0 and writes the module."""
        write_arb("app_en.arb", {"hello": "Hello {name}"})

        assert main(["--project-dir", str(tmp_path)]) == 0
        assert (tmp_path / "app_localizations.py").exists()

    def test_reads_l10n_yaml(self, tmp_path: Path, write_arb: ArbWriter) -> None:
        """Settings come from the project's l10n.yaml."""
        write_arb("app_en.arb", {"hello": "Hello"})
        (tmp_path / "l10n.yaml").write_text("output-localization-file: strings.py\noutput-class: Strings\n")

        assert main(["--project-dir", str(tmp_path)]) == 0
        assert "class Strings(abc.ABC):" in (tmp_path / "strings.py").read_text(encoding="utf-8")

    def test_explicit_config(self, tmp_path: Path, write_arb: ArbWriter) -> None:
        """--config names the settings file."""
        write_arb("app_de.arb", {"hello": "Hallo"})
        (tmp_path / "arbgen.toml").write_text('template-arb-file = "app_de.arb"\n')

        assert main(["--project-dir", str(tmp_path), "--config", "arbgen.toml"]) == 0

    def test_untranslated_report_option(self, tmp_path: Path, write_arb: ArbWriter) -> None:
        """--untranslated-messages-file writes the JSON report."""
        write_arb("app_en.arb", {"hello": "Hello", "bye": "Bye"})
        write_arb("app_de.arb", {"hello": "Hallo"})

        assert main(["--project-dir", str(tmp_path), "--untranslated-messages-file", "missing.json"]) == 0
        assert json.loads((tmp_path / "missing.json").read_text(encoding="utf-8")) == {"de": ["bye"]}

    def test_error_exit_code(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Generation errors exit 1 with the diagnostic on stderr."""
        assert main(["--project-dir", str(tmp_path)]) == 1

        err = capsys.readouterr().err
        assert err.startswith("error[NO_BUNDLES]: No ARB files found in: l10n")

    def test_json_diagnostics(
        self, tmp_path: Path, write_arb: ArbWriter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """--diagnostic-format json prints one JSON object."""
        write_arb("app_en.arb", {"items": "{n, plural, one{item}}"})

        assert main(["--project-dir", str(tmp_path), "--diagnostic-format", "json"]) == 1

        data = json.loads(capsys.readouterr().err)
        assert data["code"] == "MISSING_OTHER_BRANCH"
        assert data["message_key"] == "items"

    def test_bad_argument(self, capsys: pytest.CaptureFixture[str]) -> None:
        """argparse rejects invalid arguments with exit code 2."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--diagnostic-format", "xml"])

        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err
