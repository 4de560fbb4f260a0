"""Tests for generator.py - end-to-end runs over ARB directories.

Coverage:
    - Writing the generated module and importing it
    - Untranslated-messages report
    - Supported locale ordering and preferred locales
    - Header and header-file
    - Missing directory, empty directory and missing template
"""

from __future__ import annotations

import importlib.util
import json
import logging
from collections.abc import Callable
from pathlib import Path
from types import ModuleType

import pytest

from arbgen.bundles import LocalFileSystem
from arbgen.config import GeneratorConfig
from arbgen.diagnostics import (
    ConfigError,
    DiagnosticCode,
    MessageParseError,
    MissingResourceAttributeError,
    NoBundlesError,
    TemplateNotFoundError,
)
from arbgen.generator import LocalizationsGenerator

type ArbWriter = Callable[[str, dict[str, object] | str], Path]


def generator(tmp_path: Path, **settings: object) -> LocalizationsGenerator:
    config = GeneratorConfig.from_mapping(settings)
    return LocalizationsGenerator(config, LocalFileSystem(str(tmp_path)))


def import_file(path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(path.stem, path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def project(write_arb: ArbWriter) -> None:
    """English template with complete German and partial French translations."""
    write_arb(
        "app_en.arb",
        {
            "@@locale": "en",
            "title": "Inbox",
            "unread": "{count, plural, =0{No new mail} one{One new mail} other{{count} new mails}}",
            "@unread": {"placeholders": {"count": {"type": "int"}}},
            "signOut": "Sign out",
        },
    )
    write_arb(
        "app_de.arb",
        {
            "title": "Posteingang",
            "unread": "{count, plural, =0{Keine neue Post} one{Eine neue Nachricht} other{{count} neue Nachrichten}}",
            "signOut": "Abmelden",
        },
    )
    write_arb("app_fr.arb", {"title": "Boîte de réception", "unread": "{count, plural, one{Un}}"})


# ============================================================================
# Successful runs
# ============================================================================


@pytest.mark.usefixtures("project")
class TestRun:
    """Complete generator runs."""

    def test_writes_importable_module(self, tmp_path: Path) -> None:
        """The module is written to output-localization-file and works."""
        result = generator(tmp_path, **{"output-localization-file": "src/app/l10n.py"}).run()

        output = tmp_path / "src" / "app" / "l10n.py"
        assert Path(result.output_path) == Path("src/app/l10n.py")
        assert output.exists()
        module = import_file(output)
        de = module.lookup_app_localizations("de_DE")
        assert de.title == "Posteingang"
        assert de.unread(0) == "Keine neue Post"
        assert de.unread(7) == "7 neue Nachrichten"

    def test_result_summary(self, tmp_path: Path) -> None:
        """The result lists locales, message count and untranslated keys."""
        result = generator(tmp_path).run()

        assert result.locales == ("de", "en", "fr")
        assert result.message_count == 3
        assert result.untranslated == {"fr": ["unread", "signOut"]}

    def test_untranslated_report(self, tmp_path: Path) -> None:
        """The report is JSON keyed by locale, in template key order."""
        generator(tmp_path, **{"untranslated-messages-file": "reports/missing.json"}).run()

        report = json.loads((tmp_path / "reports" / "missing.json").read_text(encoding="utf-8"))
        assert report == {"fr": ["unread", "signOut"]}

    def test_report_path_override(self, tmp_path: Path) -> None:
        """run() can name the report file explicitly."""
        generator(tmp_path).run(untranslated_messages_file="todo.json")

        assert json.loads((tmp_path / "todo.json").read_text(encoding="utf-8")) == {"fr": ["unread", "signOut"]}

    def test_untranslated_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Each incomplete locale is reported in the log."""
        with caplog.at_level(logging.WARNING, logger="arbgen"):
            generator(tmp_path).run()

        assert any("2 untranslated message(s) in locale fr" in r.getMessage() for r in caplog.records)

    def test_untranslated_suppressed(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """suppress-warnings keeps the run free of warnings."""
        with caplog.at_level(logging.WARNING, logger="arbgen"):
            generator(tmp_path, **{"suppress-warnings": True}).run()

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_required_attributes_apply_to_template_only(self, tmp_path: Path, write_arb: ArbWriter) -> None:
        """Translations without @key metadata pass when the template has it."""
        write_arb(
            "app_en.arb",
            {
                "title": "Inbox",
                "@title": {},
                "unread": "{count} new",
                "@unread": {"placeholders": {"count": {"type": "int"}}},
                "signOut": "Sign out",
                "@signOut": {"description": "Button label"},
            },
        )
        write_arb("app_es.arb", {"title": "Bandeja de entrada", "signOut": "Salir"})

        result = generator(tmp_path, **{"required-resource-attributes": True}).run()

        assert result.locales == ("de", "en", "es", "fr")

    def test_required_attributes_missing_in_template(self, tmp_path: Path) -> None:
        """The template itself must still carry @key metadata."""
        with pytest.raises(MissingResourceAttributeError) as exc_info:
            generator(tmp_path, **{"required-resource-attributes": True}).run()

        assert "app_en.arb" in str(exc_info.value)

    def test_deterministic_output(self, tmp_path: Path) -> None:
        """Two runs write byte-identical modules."""
        generator(tmp_path).run()
        first = (tmp_path / "app_localizations.py").read_bytes()
        generator(tmp_path).run()

        assert (tmp_path / "app_localizations.py").read_bytes() == first


@pytest.mark.usefixtures("project")
class TestSupportedLocales:
    """Locale order in the generated module."""

    def test_preferred_first(self, tmp_path: Path) -> None:
        """Preferred locales lead in configured order; the rest are sorted."""
        locales = generator(tmp_path, **{"preferred-supported-locales": ["fr"]}).supported_locales

        assert [str(loc) for loc in locales] == ["fr", "de", "en"]

    def test_preferred_duplicates_collapsed(self, tmp_path: Path) -> None:
        """A locale listed twice appears once."""
        locales = generator(tmp_path, **{"preferred-supported-locales": ["en", "en"]}).supported_locales

        assert [str(loc) for loc in locales] == ["en", "de", "fr"]

    def test_unknown_preferred_locale(self, tmp_path: Path) -> None:
        """A preferred locale without a bundle is a configuration error."""
        with pytest.raises(ConfigError) as exc_info:
            generator(tmp_path, **{"preferred-supported-locales": ["ja"]}).run()

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNKNOWN_PREFERRED_LOCALE
        assert "'de', 'en', 'fr'" in str(exc_info.value)


@pytest.mark.usefixtures("project")
class TestHeader:
    """Header text sources."""

    def test_header(self, tmp_path: Path) -> None:
        """header is placed after the banner."""
        source = generator(tmp_path, header="Copyright ACME").generate()

        assert source.splitlines()[1] == "# Copyright ACME"

    def test_header_file_relative_to_arb_dir(self, tmp_path: Path, write_arb: ArbWriter) -> None:
        """header-file is read from the ARB directory."""
        write_arb("header.txt", "# Licensed under MIT\n")

        source = generator(tmp_path, **{"header-file": "header.txt"}).generate()

        assert source.splitlines()[1] == "# Licensed under MIT"

    def test_missing_header_file(self, tmp_path: Path) -> None:
        """An unreadable header file is a configuration error."""
        with pytest.raises(ConfigError, match="header.txt"):
            generator(tmp_path, **{"header-file": "header.txt"}).generate()


# ============================================================================
# Failures
# ============================================================================


class TestFailures:
    """Errors that abort a run."""

    def test_missing_directory(self, tmp_path: Path) -> None:
        """No ARB directory at all."""
        with pytest.raises(NoBundlesError):
            generator(tmp_path).run()

    def test_empty_directory(self, tmp_path: Path) -> None:
        """A directory without ARB files."""
        (tmp_path / "l10n").mkdir()

        with pytest.raises(NoBundlesError) as exc_info:
            generator(tmp_path).run()

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.NO_BUNDLES

    def test_template_not_found(self, tmp_path: Path, write_arb: ArbWriter) -> None:
        """The configured template file must be one of the bundles."""
        write_arb("app_de.arb", {"title": "Titel"})

        with pytest.raises(TemplateNotFoundError) as exc_info:
            generator(tmp_path).run()

        assert "'app_de.arb'" in str(exc_info.value)

    def test_other_template(self, tmp_path: Path, write_arb: ArbWriter) -> None:
        """Any bundle can be the template."""
        write_arb("app_de.arb", {"title": "Titel"})

        result = generator(tmp_path, **{"template-arb-file": "app_de.arb"}).run()

        assert result.locales == ("de",)

    def test_template_parse_error(self, tmp_path: Path, write_arb: ArbWriter) -> None:
        """A broken template message aborts with nothing written."""
        write_arb("app_en.arb", {"items": "{n, plural, one{item}}"})

        with pytest.raises(MessageParseError):
            generator(tmp_path).run()

        assert not (tmp_path / "app_localizations.py").exists()
