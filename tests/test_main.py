import json

import pytest

import requestable
from requestable import __main__ as cli
from requestable.github import Account


@pytest.fixture
def fake_run(mocker):
    calls = []

    def make(outcome):
        async def run(descriptor, timeout):
            calls.append((descriptor, timeout))
            return outcome

        mocker.patch.object(cli, "run", run)
        mocker.patch.object(cli, "setup_logging")
        return calls

    return make


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("REQUESTABLE_TIMEOUT", raising=False)


def test_user(fake_run, capsys):
    calls = fake_run(requestable.Success(Account("Alice", "hi")))
    assert cli.main(["user", "alice"]) == 0
    [(descriptor, timeout)] = calls
    assert descriptor.url == "https://api.github.com/users/alice"
    assert timeout == 60.0
    assert json.loads(capsys.readouterr().out) == {
        "name": "Alice",
        "bio": "hi",
    }


def test_search_with_timeout(fake_run):
    calls = fake_run(requestable.NoResponse())
    assert cli.main(["--timeout", "3", "search", "snug", "--sort", "stars"]) == 1
    [(descriptor, timeout)] = calls
    assert "q=snug&sort=stars" in descriptor.url
    assert timeout == 3.0


def test_http_error(fake_run, capsys):
    fake_run(requestable.HttpError(404, b'{"message": "Not Found"}'))
    assert cli.main(["user", "nobody"]) == 1
    assert "Not Found" in capsys.readouterr().err


def test_gist_requires_token(fake_run, tmp_path):
    fake_run(requestable.NoResponse())
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(SystemExit, match="GITHUB_TOKEN"):
        cli.main(["gist", str(path)])


def test_gist(fake_run, tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "tok")
    calls = fake_run(
        requestable.Success(
            requestable.github.Gist("1", "https://gist.github.com/1", None)
        )
    )
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    assert cli.main(["gist", str(path), "--public"]) == 0
    [(descriptor, _)] = calls
    assert descriptor.headers["Authorization"] == "Bearer tok"
    assert descriptor.body == {
        "public": True,
        "files": {"notes.txt": {"content": "hello"}},
    }
