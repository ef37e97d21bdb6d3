import io
from pathlib import Path

import pytest
from rich.console import Console

from core.errors import ConfigReadError, ConfigWriteError
from core.models import LocalIdentity, ProfiledConfig
from core.resolver import IdentityResolver

PROFILE_TEXT = """\
[work]
name = "A"
email = "a@x.com"

[personal]
name = "B"
email = "b@x.com"
"""


class FakeGitConfig:
    def __init__(self, name: str = "", email: str = ""):
        self.values = {"user.name": name, "user.email": email}
        self.writes: list[tuple[str, str]] = []
        self.fail_on: str | None = None

    def read(self, **kwargs) -> LocalIdentity:
        return LocalIdentity(name=self.values["user.name"], email=self.values["user.email"])

    def write(self, key: str, value: str, **kwargs) -> None:
        if key == self.fail_on:
            raise ConfigWriteError(key, "permission denied")
        self.writes.append((key, value))
        self.values[key] = value


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    path = tmp_path / "repo"
    (path / ".git").mkdir(parents=True)
    return path


@pytest.fixture
def profile_file(tmp_path: Path) -> Path:
    path = tmp_path / ".git_profiled_config"
    path.write_text(PROFILE_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def git_config(monkeypatch) -> FakeGitConfig:
    fake = FakeGitConfig()
    monkeypatch.setattr("core.resolver.read_local_identity", fake.read)
    monkeypatch.setattr("core.resolver.write_config_value", fake.write)
    return fake


def _resolver(profile_path: Path, cwd: Path, answer: str | None = None):
    out = io.StringIO()
    prompts: list[str] = []

    def provider(console):
        prompts.append("asked")
        assert answer is not None, "prompt was not expected"
        return answer

    resolver = IdentityResolver(
        ProfiledConfig(profile_path=str(profile_path)),
        cwd=cwd,
        console=Console(file=out, width=200),
        input_provider=provider,
    )
    return resolver, out, prompts


def test_choosing_second_profile_sets_personal_identity(repo, profile_file, git_config):
    resolver, out, prompts = _resolver(profile_file, repo, answer="1")
    assert resolver.resolve() is True
    assert prompts == ["asked"]
    assert git_config.writes == [("user.email", "b@x.com"), ("user.name", "B")]

    text = out.getvalue()
    assert text.index("[0] work -> A <a@x.com>") < text.index("[1] personal -> B <b@x.com>")
    assert "Successfully set local user information." in text
    assert "Email: b@x.com" in text
    assert "Name: B" in text


def test_listing_follows_file_order(repo, tmp_path, git_config):
    path = tmp_path / "ordered"
    path.write_text(
        '[zulu]\nname = "Z"\nemail = "z@x.com"\n[alpha]\nname = "A"\nemail = "a@x.com"\n',
        encoding="utf-8",
    )
    resolver, out, _ = _resolver(path, repo, answer="0")
    assert resolver.resolve() is True
    assert "[0] zulu -> Z <z@x.com>" in out.getvalue()
    assert "[1] alpha -> A <a@x.com>" in out.getvalue()
    assert git_config.values == {"user.name": "Z", "user.email": "z@x.com"}


def test_complete_identity_never_prompts(repo, profile_file, git_config):
    git_config.values = {"user.name": "Set", "user.email": "set@x.com"}
    resolver, out, prompts = _resolver(profile_file, repo)
    assert resolver.resolve() is True
    assert prompts == []
    assert git_config.writes == []
    assert out.getvalue() == ""


def test_partial_identity_prompts(repo, profile_file, git_config):
    git_config.values = {"user.name": "Set", "user.email": ""}
    resolver, _, prompts = _resolver(profile_file, repo, answer="0")
    assert resolver.resolve() is True
    assert prompts == ["asked"]


def test_outside_repository_never_looks_up_profiles(tmp_path, monkeypatch, git_config):
    def boom(path):
        raise AssertionError("profile file must not be read outside a repository")

    monkeypatch.setattr("core.resolver.require_profiles", boom)
    resolver, _, prompts = _resolver(tmp_path / "missing", tmp_path)
    assert resolver.resolve() is True
    assert prompts == []


@pytest.mark.parametrize("answer", ["x", "-1", "2", ""])
def test_invalid_choice_exits_without_writing(repo, profile_file, git_config, answer):
    resolver, out, _ = _resolver(profile_file, repo, answer=answer)
    with pytest.raises(SystemExit) as excinfo:
        resolver.resolve()
    assert excinfo.value.code == 1
    assert git_config.writes == []
    assert "Invalid choice." in out.getvalue()


def test_missing_profile_file_returns_false(repo, tmp_path, git_config):
    resolver, out, prompts = _resolver(tmp_path / "absent", repo)
    assert resolver.resolve() is False
    assert prompts == []
    assert "no absent found" in out.getvalue()


def test_empty_profile_set_returns_false(repo, tmp_path, git_config):
    path = tmp_path / "empty"
    path.write_text("[empty]\n", encoding="utf-8")
    resolver, out, prompts = _resolver(path, repo)
    assert resolver.resolve() is False
    assert prompts == []
    assert "No profile" in out.getvalue()


def test_malformed_profile_file_returns_false(repo, tmp_path, git_config):
    path = tmp_path / "broken"
    path.write_text("[work\n", encoding="utf-8")
    resolver, out, _ = _resolver(path, repo)
    assert resolver.resolve() is False
    assert "Error reading" in out.getvalue()


def test_read_failure_is_a_hard_failure(repo, profile_file, monkeypatch):
    def failing_read(**kwargs):
        raise ConfigReadError("Failed to get user.email: bad config line 3")

    monkeypatch.setattr("core.resolver.read_local_identity", failing_read)
    resolver, out, prompts = _resolver(profile_file, repo)
    assert resolver.resolve() is False
    assert prompts == []
    assert "bad config line 3" in out.getvalue()


@pytest.mark.parametrize("field", ["user.email", "user.name"])
def test_write_failure_exits_and_names_field(repo, profile_file, git_config, field):
    git_config.fail_on = field
    resolver, out, _ = _resolver(profile_file, repo, answer="0")
    with pytest.raises(SystemExit) as excinfo:
        resolver.resolve()
    assert excinfo.value.code == 1
    assert f"Failed to set {field}" in out.getvalue()


def test_long_lines_are_not_wrapped(repo, tmp_path, git_config):
    path = tmp_path / "long"
    name = "Jane Alexandra Doe-Smithington"
    email = "jane.alexandra.doe-smithington@engineering.company.example"
    path.write_text(f'[work-account]\nname = "{name}"\nemail = "{email}"\n', encoding="utf-8")
    out = io.StringIO()
    resolver = IdentityResolver(
        ProfiledConfig(profile_path=str(path)),
        cwd=repo,
        console=Console(file=out, width=80),
        input_provider=lambda console: "0",
    )
    assert resolver.resolve() is True

    lines = out.getvalue().splitlines()
    expected = f"[0] work-account -> {name} <{email}>"
    assert len(expected) > 80
    assert expected in lines
    assert f"Email: {email}" in lines
