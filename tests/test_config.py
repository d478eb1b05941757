from pathlib import Path

import pytest

from core.config import Settings, load_config, load_seeds_config
from core.errors import ConfigValidationError


def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.prefs_path == "./data/jobtracker_prefs.json"
    assert settings.jobs_key == "jobs_json"
    assert settings.strict_status is False
    assert settings.background_saves is True
    assert settings.log_level == "INFO"


def test_settings_read_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JOB_TRACKER_JOBS_KEY", "custom_jobs")
    monkeypatch.setenv("JOB_TRACKER_STRICT_STATUS", "true")
    monkeypatch.setenv("JOB_TRACKER_LOG_LEVEL", " debug ")

    settings = Settings()

    assert settings.jobs_key == "custom_jobs"
    assert settings.strict_status is True
    assert settings.log_level == "DEBUG"


def test_missing_seed_file_uses_demo_entries(tmp_path: Path) -> None:
    seeds = load_seeds_config(tmp_path / "missing.yaml")

    assert [j.company for j in seeds.jobs] == ["Yodeck", "Netcompany", "Intralot"]


def test_seed_file_overrides_demo_entries(tmp_path: Path) -> None:
    path = tmp_path / "seed_jobs.yaml"
    path.write_text("jobs:\n  - title: SRE\n    company: Initech\n")

    settings, seeds = load_config(path, Settings())

    assert settings.jobs_key == "jobs_json"
    assert [(j.title, j.company, j.status) for j in seeds.jobs] == [("SRE", "Initech", "Wishlist")]


def test_invalid_seed_file_raises_with_errors(tmp_path: Path) -> None:
    path = tmp_path / "seed_jobs.yaml"
    path.write_text("jobs:\n  - title: SRE\n")

    with pytest.raises(ConfigValidationError) as exc_info:
        load_seeds_config(path)

    assert exc_info.value.errors


def test_non_mapping_seed_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "seed_jobs.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigValidationError):
        load_seeds_config(path)


def test_strict_mode_rejects_unknown_seed_status(tmp_path: Path) -> None:
    path = tmp_path / "seed_jobs.yaml"
    path.write_text("jobs:\n  - title: SRE\n    company: Initech\n    status: Ghosted\n")

    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(path, Settings(strict_status=True))

    assert exc_info.value.errors[0]["loc"] == ["jobs", 0, "status"]


def test_lenient_mode_keeps_custom_seed_status(tmp_path: Path) -> None:
    path = tmp_path / "seed_jobs.yaml"
    path.write_text("jobs:\n  - title: SRE\n    company: Initech\n    status: Ghosted\n")

    _, seeds = load_config(path, Settings())

    assert seeds.jobs[0].status == "Ghosted"
