from __future__ import annotations

from pathlib import Path

import pytest

from btrfs_journal_monitor import cli


@pytest.fixture
def no_fetch(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(config):
        raise AssertionError("log fetch must not be attempted")

    monkeypatch.setattr(cli, "select_log_source", _fail)


@pytest.mark.parametrize(
    ("argv", "message"),
    [
        (["--mode=production", "--lookback=1h"], "--email is required"),
        (["--email=a@b.c", "--lookback=1h"], "--mode is required"),
        (["--mode=production", "--email=a@b.c"], "--lookback is required"),
        (["--mode=staging", "--email=a@b.c", "--lookback=1h"], "--mode must be production or development"),
        (["--mode=production", "--email=a@b.c", "--lookback=0h0m"], "--lookback cannot be 0h0m"),
        (["--mode=production", "--email=a@b.c", "--lookback=1d"], "--lookback must be in format NhNm"),
        (["--mode=production", "--email=a@b.c", "--lookback=1h", "--verbose"], "Unknown argument: --verbose"),
        (["--mode=production", "--email=", "--lookback=1h"], "--email is required"),
    ],
)
def test_usage_errors_exit_2(no_fetch, capsys: pytest.CaptureFixture[str], argv, message) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 2
    err = capsys.readouterr().err
    assert "usage:" in err
    assert message in err


def test_help_exits_0(no_fetch, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["--help"])
    assert exc.value.code == 0
    assert "--notification-url" in capsys.readouterr().out


def test_invalid_timeout_env_exits_2(no_fetch, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("BTRFS_MONITOR_TIMEOUT", "soon")
    with pytest.raises(SystemExit) as exc:
        cli.main(["--mode=production", "--email=a@b.c", "--lookback=1h", f"--log={tmp_path / 'm.log'}"])
    assert exc.value.code == 2


def test_unwritable_log_exits_2(no_fetch, tmp_path: Path) -> None:
    bad = tmp_path / "missing-dir" / "monitor.log"
    with pytest.raises(SystemExit) as exc:
        cli.main(["--mode=production", "--email=a@b.c", "--lookback=1h", f"--log={bad}"])
    assert exc.value.code == 2


def test_build_config_parses_all_flags(tmp_path: Path) -> None:
    parser = cli.build_parser()
    cfg = cli.build_config(
        parser,
        [
            "--mode=production",
            "--email=ops@example.com",
            "--lookback=1h30m",
            "--debug",
            f"--log={tmp_path / 'm.log'}",
            "--heartbeat-url=https://hc.example/ping",
            "--notification-url=https://ntfy.example/btrfs",
        ],
    )
    assert cfg.mode.value == "production"
    assert (cfg.lookback_hours, cfg.lookback_minutes) == (1, 30)
    assert cfg.debug is True
    assert cfg.log_path == tmp_path / "m.log"
    assert cfg.heartbeat_url == "https://hc.example/ping"
    assert cfg.notification_url == "https://ntfy.example/btrfs"


def test_development_end_to_end(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    write_kernel_log,
    recording_mailer,
    kernel_lines,
) -> None:
    monkeypatch.chdir(tmp_path)
    write_kernel_log(tmp_path / "journalctl_output.txt")
    mailer = recording_mailer()
    monkeypatch.setattr(cli, "MailCommandMailer", lambda **kwargs: mailer)
    log_file = tmp_path / "monitor.log"

    cli.main(
        ["--mode=development", "--email=ops@example.com", "--lookback=1h", f"--log={log_file}"]
    )

    assert len(mailer.sent) == 1
    subject, recipient, body = mailer.sent[0]
    assert subject.endswith(": BTRFS kernel alert (INSTANT delivery)")
    assert recipient == "ops@example.com"
    matching = [line for line in body.splitlines() if "kernel: BTRFS" in line]
    assert matching == [kernel_lines.error]

    log_text = log_file.read_text(encoding="utf-8")
    assert "] [info] STARTING === BTRFS journal kernel check ===" in log_text
    assert "] [error] BTRFS kernel lines detected; sending INSTANT notification." in log_text
    assert "[debug]" not in log_text


def test_development_no_file_is_quiet(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, recording_mailer
) -> None:
    monkeypatch.chdir(tmp_path)
    mailer = recording_mailer()
    monkeypatch.setattr(cli, "MailCommandMailer", lambda **kwargs: mailer)
    log_file = tmp_path / "monitor.log"

    cli.main(
        ["--mode=development", "--email=ops@example.com", "--lookback=30m", "--debug", f"--log={log_file}"]
    )

    assert mailer.sent == []
    log_text = log_file.read_text(encoding="utf-8")
    assert "No BTRFS kernel lines found (after exclusions) in lookback window." in log_text
    assert "[debug] Config: MODE=development" in log_text


def test_malformed_heartbeat_url_still_exits_0(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, recording_mailer
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "MailCommandMailer", lambda **kwargs: recording_mailer())
    log_file = tmp_path / "monitor.log"

    cli.main(
        [
            "--mode=development",
            "--email=ops@example.com",
            "--lookback=1h",
            "--heartbeat-url=http://[::1",
            f"--log={log_file}",
        ]
    )

    assert "] [error] heartbeat-url failed:" in log_file.read_text(encoding="utf-8")
