from click.testing import CliRunner

from quire.cli import cli
from quire.errors import BuildError, WatchError


class DummyWatcher:
    instances: list = []

    def __init__(self, config):
        self.config = config
        self.started = False
        DummyWatcher.instances.append(self)

    def start(self):
        self.started = True


def run(monkeypatch, tmp_path, args, watcher_cls=DummyWatcher, env=None):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("quire.watcher.SiteWatcher", watcher_cls)
    runner = CliRunner()
    return runner.invoke(cli, args, env=env or {})


def test_cli_builds_and_watches(monkeypatch, tmp_path):
    DummyWatcher.instances = []
    result = run(monkeypatch, tmp_path, [], env={"TITLE": "CLI Blog", "BASE_URL": "https://x.io"})
    assert result.exit_code == 0
    watcher = DummyWatcher.instances[-1]
    assert watcher.started
    assert watcher.config.is_prod is False
    assert watcher.config.title == "CLI Blog"
    assert watcher.config.base_url == (tmp_path / "webpage").as_posix()
    assert "Using title: CLI Blog" in result.output


def test_cli_prod_flag(monkeypatch, tmp_path):
    DummyWatcher.instances = []
    result = run(monkeypatch, tmp_path, ["--prod"], env={"BASE_URL": "https://x.io"})
    assert result.exit_code == 0
    config = DummyWatcher.instances[-1].config
    assert config.is_prod is True
    assert config.base_url == "https://x.io"


def test_cli_reads_env_file(monkeypatch, tmp_path):
    DummyWatcher.instances = []
    (tmp_path / ".env").write_text("FOOTER=From dotenv\n", encoding="utf-8")
    # register FOOTER for restoration before dotenv sets it
    monkeypatch.setenv("FOOTER", "placeholder")
    monkeypatch.delenv("FOOTER")
    result = run(monkeypatch, tmp_path, [])
    assert result.exit_code == 0
    assert DummyWatcher.instances[-1].config.footer == "From dotenv"


def test_cli_build_error_exits_nonzero(monkeypatch, tmp_path):
    class FailingWatcher(DummyWatcher):
        def start(self):
            raise BuildError(tmp_path / "data" / "broken.md", "Cannot read post")

    result = run(monkeypatch, tmp_path, [], watcher_cls=FailingWatcher)
    assert result.exit_code == 1
    assert "Build failed:" in result.output
    assert "data/broken.md" in result.output
    assert "Cannot read post" in result.output


def test_cli_watch_error_exits_nonzero(monkeypatch, tmp_path):
    class NoWatch(DummyWatcher):
        def start(self):
            raise WatchError("Cannot watch missing data directory")

    result = run(monkeypatch, tmp_path, [], watcher_cls=NoWatch)
    assert result.exit_code == 1
    assert "Cannot watch missing data directory" in result.output


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "quire" in result.output


def test_module_main_entrypoint():
    from quire.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import quire.cli as cli_mod

    called = {}
    monkeypatch.setattr(cli_mod, "cli", lambda: called.setdefault("ran", True))
    cli_mod.main()
    assert called["ran"]
