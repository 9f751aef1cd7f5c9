"""Tests for the command-line entry point (no browser)."""

from pathlib import Path

import pytest

from joblinks.core.config import SearchCriteria, Settings
from main import dry_run, main, parse_args

CONFIG = """\
searches:
  - keywords: python engineer
    location: Berlin
    workplace_modes: [remote]
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(CONFIG)
    return path


class TestParseArgs:
    def test_defaults_to_search(self) -> None:
        args = parse_args([])
        assert args.command == "search"
        assert args.config == "config/settings.yaml"
        assert args.limit is None
        assert args.dry_run is False

    def test_search_subcommand(self) -> None:
        args = parse_args(["search", "--limit", "5", "--export", "json", "-v"])
        assert args.command == "search"
        assert args.limit == 5
        assert args.export == "json"
        assert args.verbose is True

    def test_top_level_flags(self) -> None:
        args = parse_args(["--dry-run", "--config", "other.yaml"])
        assert args.dry_run is True
        assert args.config == "other.yaml"

    def test_rejects_unknown_export(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--export", "csv"])


class TestDryRun:
    def test_prints_url_and_patterns(self, capsys: pytest.CaptureFixture[str]) -> None:
        settings = Settings(searches=[
            SearchCriteria(keywords="python engineer", location="Berlin", title_exclude_pattern="intern"),
        ])
        dry_run(settings)
        out = capsys.readouterr().out
        assert "1 searches configured" in out
        assert "keywords=python+engineer" in out
        assert "'intern'" in out

    def test_main_dry_run(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--dry-run", "--config", str(config_file)])
        assert "f_WT=2" in capsys.readouterr().out


class TestMainErrors:
    def test_missing_config_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--dry-run", "--config", str(tmp_path / "missing.yaml")])
        assert exc_info.value.code == 1
        assert "Error loading config" in capsys.readouterr().err

    def test_invalid_config_exits(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("searches: []\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["--dry-run", "--config", str(path)])
        assert exc_info.value.code == 1

    def test_limit_below_one_exits(self, config_file: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--dry-run", "--limit", "0", "--config", str(config_file)])
        assert exc_info.value.code == 1

    def test_empty_config_exits(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(SystemExit) as exc_info:
            main(["--dry-run", "--config", str(path)])
        assert exc_info.value.code == 1
