"""Tests for the mailfx CLI."""

from __future__ import annotations

import io
import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from mailfx.cli import main as cli
from mailfx.core.ai.adapter import AIAdapter
from mailfx.core.ai.errors import QuotaExceededError
from mailfx.core.composition.engine import compose
from tests.conftest import make_remote_model


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command where no mailfx.yaml exists."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def mock_client() -> AsyncMock:
    """Gemini client stand-in with two text models."""
    mock = AsyncMock()
    mock.list_models.return_value = [
        make_remote_model("gemini-2.0-flash"),
        make_remote_model("gemini-2.5-pro"),
    ]
    return mock


@pytest.fixture
def fake_adapter(monkeypatch: pytest.MonkeyPatch, mock_client: AsyncMock) -> AsyncMock:
    """Route create_adapter to an adapter over the mock client."""
    created: list[str] = []

    def factory(api_key, config=None):
        created.append(api_key)
        return AIAdapter(mock_client, config=config)

    monkeypatch.setattr(cli, "create_adapter", factory)
    mock_client.created = created
    return mock_client


class TestOfflineCommands:
    """Commands that need no API key."""

    def test_compose(self, capsys):
        """compose prints the fragment to stdout."""
        assert cli.main(["compose", "Hi", "--color", "rainbow"]) == 0
        assert capsys.readouterr().out == compose("Hi", {"color": "rainbow"}) + "\n"

    def test_compose_options(self, capsys):
        """Size options reach the engine."""
        assert cli.main(["compose", "abc", "--size", "rise", "--base-size", "20"]) == 0
        expected = compose("abc", {"size": "rise"}, {"base_size": 20})
        assert capsys.readouterr().out.strip() == expected

    def test_compose_uses_config_defaults(self, capsys, isolated_cwd):
        """composition defaults from mailfx.yaml apply when no flag overrides them."""
        (isolated_cwd / "mailfx.yaml").write_text("composition:\n  base_size: 24\n")
        assert cli.main(["compose", "abc", "--size", "rise"]) == 0
        expected = compose("abc", {"size": "rise"}, {"base_size": 24})
        assert capsys.readouterr().out.strip() == expected
        assert cli.main(["compose", "abc", "--size", "rise", "--base-size", "20"]) == 0
        expected = compose("abc", {"size": "rise"}, {"base_size": 20})
        assert capsys.readouterr().out.strip() == expected

    def test_compose_reads_stdin(self, capsys, monkeypatch):
        """'-' reads the text from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("yo"))
        assert cli.main(["compose", "-", "--color", "flame"]) == 0
        assert capsys.readouterr().out.strip() == compose("yo", {"color": "flame"})

    def test_random_seed_is_reproducible(self, capsys):
        """The same seed prints the same markup."""
        assert cli.main(["random", "Hello world", "--seed", "7"]) == 0
        first = capsys.readouterr().out
        assert cli.main(["random", "Hello world", "--seed", "7"]) == 0
        assert capsys.readouterr().out == first
        assert first.strip()

    def test_random_explain_goes_to_stderr(self, capsys):
        """--explain keeps stdout to the markup only."""
        assert cli.main(["random", "Hello", "--seed", "3", "--chaos", "--explain"]) == 0
        captured = capsys.readouterr()
        assert captured.err.strip().startswith("{")
        assert not captured.out.startswith("{")

    def test_effects_table(self, capsys):
        """effects lists every catalog key."""
        assert cli.main(["effects"]) == 0
        out = capsys.readouterr().out
        for key in ("rainbow", "flame", "flower", "wave"):
            assert key in out

    def test_strip(self, capsys, isolated_cwd):
        """strip removes decorations, --text yields plain text."""
        path = isolated_cwd / "mail.html"
        path.write_text("<p>" + compose("Hi you", {"color": "rainbow"}) + "</p>")
        assert cli.main(["strip", str(path)]) == 0
        assert "✨" not in capsys.readouterr().out
        assert cli.main(["strip", str(path), "--text"]) == 0
        assert capsys.readouterr().out == "Hi you\n"

    def test_strip_missing_file(self, capsys):
        """A missing markup file is an error exit."""
        assert cli.main(["strip", "absent.html"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_explicit_config_must_exist(self, capsys):
        """--config pointing nowhere is an error exit."""
        assert cli.main(["--config", "nope.yaml", "effects"]) == 1
        assert "does not exist" in capsys.readouterr().err


class TestAICommands:
    """Commands backed by the AI adapter."""

    def test_missing_api_key(self, capsys):
        """Without a key the command fails cleanly."""
        assert cli.main(["models"]) == 1
        assert "No Gemini API key" in capsys.readouterr().err

    def test_models_table(self, capsys, fake_adapter):
        """models prints the ranked listing."""
        assert cli.main(["--api-key", "k", "models"]) == 0
        out = capsys.readouterr().out
        assert out.index("gemini-2.5-pro") < out.index("gemini-2.0-flash")
        assert fake_adapter.created == ["k"]
        fake_adapter.aclose.assert_awaited_once()

    def test_env_key_is_used(self, capsys, fake_adapter, monkeypatch):
        """GEMINI_API_KEY is picked up through the config loader."""
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        assert cli.main(["models"]) == 0
        assert fake_adapter.created == ["from-env"]

    def test_words_plain_text(self, capsys, fake_adapter):
        """Without markup the chosen words print as JSON."""
        fake_adapter.generate_content.return_value = '["quick", "zebra"]'
        assert cli.main(["--api-key", "k", "words", "The quick brown fox"]) == 0
        captured = capsys.readouterr()
        assert json.loads(captured.out) == ["quick"]
        assert "gemini-2.5-pro" in captured.err

    def test_words_patch_markup(self, capsys, fake_adapter, isolated_cwd):
        """With --markup the words are styled in place."""
        fake_adapter.generate_content.return_value = '["fox"]'
        path = isolated_cwd / "mail.html"
        path.write_text("<p>The quick brown fox</p>")
        args = ["--api-key", "k", "words", "--markup", str(path), "--color", "rainbow"]
        assert cli.main(args) == 0
        expected = "<p>The quick brown " + compose("fox", {"color": "rainbow"}) + "</p>"
        assert capsys.readouterr().out.strip() == expected

    def test_words_markup_needs_an_effect(self, capsys, fake_adapter, isolated_cwd):
        """Patching markup without --color or --size is refused before any call."""
        path = isolated_cwd / "mail.html"
        path.write_text("<p>The quick brown fox</p>")
        assert cli.main(["--api-key", "k", "words", "--markup", str(path)]) == 1
        assert "--color" in capsys.readouterr().err
        fake_adapter.list_models.assert_not_awaited()

    def test_words_quota_everywhere(self, capsys, fake_adapter):
        """Exhausted quota is reported as an error exit."""
        fake_adapter.generate_content.side_effect = QuotaExceededError("Quota exceeded [429]")
        assert cli.main(["--api-key", "k", "words", "The quick brown fox"]) == 1
        assert "Quota exceeded [429]" in capsys.readouterr().err

    def test_emoji_into_markup(self, capsys, fake_adapter, isolated_cwd):
        """The emoji is inserted after the anchor word."""
        fake_adapter.generate_content.return_value = "🦊"
        path = isolated_cwd / "mail.html"
        path.write_text("<p>The quick brown fox</p>")
        args = ["--api-key", "k", "emoji", "fox", "--markup", str(path)]
        assert cli.main(args) == 0
        assert capsys.readouterr().out.strip() == "<p>The quick brown fox 🦊</p>"

    def test_emoji_plain(self, capsys, fake_adapter):
        """Without markup the emoji alone is printed."""
        fake_adapter.generate_content.return_value = "Sure: 🎉"
        assert cli.main(["--api-key", "k", "emoji", "Party"]) == 0
        assert capsys.readouterr().out == "🎉\n"
