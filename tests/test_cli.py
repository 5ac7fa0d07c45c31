import pytest
from click.testing import CliRunner

from timecache import ExpiringCache, main
from timecache.bench import run_bench

ENV_VARS = ("TIMECACHE_STORE_SECONDS", "TIMECACHE_SWEEP_PERIOD_SECONDS", "TIMECACHE_YIELD_EVERY")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    # registered with monkeypatch so anything load_dotenv sets is undone
    for name in ENV_VARS:
        monkeypatch.setenv(name, "0")
        monkeypatch.delenv(name)


def test_config_command_reads_env(monkeypatch):
    monkeypatch.setenv("TIMECACHE_STORE_SECONDS", "45")
    monkeypatch.setenv("TIMECACHE_SWEEP_PERIOD_SECONDS", "0")
    result = CliRunner().invoke(main, ["config"])
    assert result.exit_code == 0, result.output
    assert "store_seconds=45" in result.output
    assert "janitor disabled" in result.output


def test_config_command_loads_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TIMECACHE_YIELD_EVERY=250\n")
    result = CliRunner().invoke(main, ["--env-file", str(env_file), "config"])
    assert result.exit_code == 0, result.output
    assert "yield_every=250" in result.output


def test_bench_command_reports_sweep():
    result = CliRunner().invoke(main, ["bench", "--entries", "2000", "--yield-every", "100"])
    assert result.exit_code == 0, result.output
    assert "entries=2000 removed=1000" in result.output
    assert "max_get=" in result.output


def test_bench_command_rejects_bad_input():
    result = CliRunner().invoke(main, ["bench", "--entries", "0"])
    assert result.exit_code != 0
    assert "--entries must be positive" in result.output


def test_run_bench_removes_expired_half():
    result = run_bench(1000, 0)
    assert result.removed == 500
    assert result.sweep_seconds >= 0
    assert result.gets >= 0


def test_run_bench_surfaces_sweep_failure(monkeypatch):
    def broken_sweep(self):
        raise RuntimeError("sweep exploded")

    monkeypatch.setattr(ExpiringCache, "sweep_expired", broken_sweep)
    with pytest.raises(RuntimeError, match="sweep exploded"):
        run_bench(100, 10)
