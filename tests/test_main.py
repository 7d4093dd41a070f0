"""Tests for the command-line entry point."""

import json

import main
from referencime.config import API_KEY_ENV


class FakeServer:
    def __init__(self):
        self.ran = False

    def run(self):
        self.ran = True


class TestMain:
    def test_no_command_prints_usage(self, capsys):
        assert main.main([]) == 0

        out = capsys.readouterr().out
        assert main.USAGE in out
        config = json.loads(out[out.index("{"):])
        assert config["mcpServers"]["referencime"]["args"] == ["start"]
        assert API_KEY_ENV in config["mcpServers"]["referencime"]["env"]

    def test_unknown_command_prints_usage(self, capsys):
        assert main.main(["serve"]) == 0
        assert main.USAGE in capsys.readouterr().out

    def test_start_without_api_key(self, monkeypatch):
        monkeypatch.setattr(main, "load_dotenv", lambda: None)
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        server = FakeServer()
        monkeypatch.setattr(main, "build_server", lambda dispatcher: server)

        assert main.main(["start"]) == 1
        assert not server.ran

    def test_start_with_invalid_timeout(self, monkeypatch):
        monkeypatch.setattr(main, "load_dotenv", lambda: None)
        monkeypatch.setenv(API_KEY_ENV, "secret")
        monkeypatch.setenv("REFERENCIME_TIMEOUT", "soon")

        assert main.main(["start"]) == 1

    def test_start_serves(self, monkeypatch):
        monkeypatch.setattr(main, "load_dotenv", lambda: None)
        monkeypatch.setenv(API_KEY_ENV, "secret")
        monkeypatch.delenv("REFERENCIME_TIMEOUT", raising=False)
        monkeypatch.delenv("REFERENCIME_LOG_LEVEL", raising=False)
        server = FakeServer()
        built = []

        def fake_build_server(dispatcher):
            built.append(dispatcher)
            return server

        monkeypatch.setattr(main, "build_server", fake_build_server)

        assert main.main(["start"]) == 0
        assert server.ran
        assert len(built[0].registry) == 8
