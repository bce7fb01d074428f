from __future__ import annotations

from typer.testing import CliRunner

from digestcheck import cli
from digestcheck.config import ALGORITHM_ENV_VAR
from tests.helpers import sha256_hex, write_files

runner = CliRunner()


def test_cli_generate_then_check(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(ALGORITHM_ENV_VAR, raising=False)
    write_files(tmp_path, {"a.txt": "hello"})

    generated = runner.invoke(cli.app, ["a.txt"])
    assert generated.exit_code == 0, generated.output
    assert generated.output == f"{sha256_hex('hello')}  a.txt\n"

    (tmp_path / "SUMS").write_text(generated.output, encoding="utf-8")
    checked = runner.invoke(cli.app, ["--check", "SUMS"])
    assert checked.exit_code == 0, checked.output
    assert "OK: a.txt" in checked.output


def test_cli_check_mismatch_exit_code(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(ALGORITHM_ENV_VAR, raising=False)
    write_files(tmp_path, {"a.txt": "changed", "SUMS": f"{sha256_hex('hello')}  a.txt\n"})

    result = runner.invoke(cli.app, ["-c", "-q", "SUMS"])

    assert result.exit_code == 1
    assert "FAILED: a.txt" in result.output
    assert "OK: a.txt" not in result.output
    assert "WARNING: 1 computed checksum did NOT match" in result.output


def test_cli_quiet_without_check_hashes_nothing(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    write_files(tmp_path, {"a.txt": "hello"})

    result = runner.invoke(cli.app, ["--quiet", "a.txt"])

    assert result.exit_code == 0
    assert "only meaningful when verifying" in result.output
    assert sha256_hex("hello") not in result.output


def test_cli_strict_malformed_exit_code(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(ALGORITHM_ENV_VAR, raising=False)
    write_files(tmp_path, {"a.txt": "hello", "SUMS": f"bogus line\n{sha256_hex('hello')}  a.txt\n"})

    lenient = runner.invoke(cli.app, ["--check", "SUMS"])
    strict = runner.invoke(cli.app, ["--check", "--strict", "SUMS"])

    assert lenient.exit_code == 0
    assert strict.exit_code == 1


def test_cli_config_file_supplies_flags(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(ALGORITHM_ENV_VAR, raising=False)
    write_files(
        tmp_path,
        {
            "a.txt": "hello",
            "SUMS": f"{sha256_hex('hello')}  a.txt\n",
            "digestcheck.yaml": "check: true\nquiet: true\n",
        },
    )

    result = runner.invoke(cli.app, ["--config", "digestcheck.yaml", "SUMS"])

    assert result.exit_code == 0, result.output
    assert result.output == ""


def test_cli_invalid_config_exits_2(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(ALGORITHM_ENV_VAR, raising=False)
    write_files(tmp_path, {"a.txt": "hello"})

    result = runner.invoke(cli.app, ["--algorithm", "crc32", "a.txt"])

    assert result.exit_code == 2
    assert "digestcheck:" in result.output
