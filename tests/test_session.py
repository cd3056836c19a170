"""Test sessions driven by text commands and the command-line entry point."""

import json
import sys
from concurrent.futures import Future
from unittest.mock import patch

import pytest

from letterdrop.engine import GameConfig, GameSession
from letterdrop.lexicon import AsyncWordList, WordList
from letterdrop.main import load_config, load_script, main

from conftest import ScriptedLetters, WORDS


def scripted_session(letters: str, validator=None) -> GameSession:
    session = GameSession.create(validator=validator or WordList(WORDS))
    session.game.letters = ScriptedLetters(script=list(letters))
    session.game.reset()
    return session


class TestSessionCommands:
    """Test applying commands to a session."""

    def test_drop_and_submit(self):
        session = scripted_session("CAT")
        session.run(["drop 0", "drop 1", "drop 2", "trace 0,7 1,7 2,7", "submit"])

        codes = [move.code for move in session.moves]
        assert codes == ["DROPPED", "DROPPED", "DROPPED", "SELECTED", "VALID_WORD"]
        assert session.moves[-1].word == "cat"
        assert session.moves[-1].score == 5

    def test_cursor_commands(self):
        session = scripted_session("AB")
        session.run(["left", "left", "drop", "right", "drop"])
        assert session.game.cell(1, 7) == "A"
        assert session.game.cell(2, 7) == "B"
        assert session.moves[1].message == "Cursor at column 1"

    def test_select_extend_end(self):
        session = scripted_session("CAT")
        session.run(["drop 0", "drop 1", "drop 2", "select 0 7", "extend 1 7", "extend 2 7", "end"])
        assert session.moves[-1].code == "ENDED"
        assert session.moves[-1].word == "cat"

    def test_trace_reports_ignored_step(self):
        session = scripted_session("CAT")
        record_list = session.run(["drop 0", "drop 1", "drop 2", "trace 0,7 2,7"]).moves
        assert record_list[-1].ok is False
        assert record_list[-1].code == "IGNORED"
        assert session.game.selecting is False

    def test_broken_trace_selects_nothing(self):
        """Cells after a rejected step are not added and the path is dropped."""
        session = scripted_session("CATZ")
        session.run(["drop 0", "drop 1", "drop 2", "drop 5", "trace 0,7 5,7 1,7 2,7"])
        assert session.moves[-1].code == "IGNORED"
        assert session.game.path == []
        assert session.execute("submit").code == "SELECTION_TOO_SHORT"
        assert session.game.score == 0

    def test_trace_from_empty_cell(self):
        session = scripted_session("")
        record = session.execute("trace 0,7 1,7")
        assert record.code == "EMPTY_CELL"

    def test_delete_without_credit(self):
        session = scripted_session("A")
        session.run(["drop 0", "select 0 7", "delete"])
        assert session.moves[-1].code == "NO_DELETE_CREDITS"

    def test_invalid_line_is_recorded(self):
        session = scripted_session("")
        record = session.execute("fly away")
        assert record.ok is False
        assert record.action == "invalid"
        assert record.code == "INVALID_COMMAND"

    def test_comments_are_skipped(self):
        session = scripted_session("")
        session.run(["# warm up", "", "drop 0"])
        assert len(session.moves) == 1

    def test_reset_command(self):
        session = scripted_session("CAT")
        session.run(["drop 0", "reset"])
        assert session.moves[-1].code == "RESET"
        assert session.game.grid[0][7] is None

    def test_on_move_callback(self):
        session = scripted_session("")
        seen = []
        session.run(["drop 0", "drop 1"], on_move=seen.append)
        assert [move.move_number for move in seen] == [1, 2]

    def test_uses_configured_commands(self):
        config = GameConfig(seed=4, commands=["drop 0", "drop 0"])
        session = GameSession.create(config=config, validator=WordList(WORDS))
        result = session.run()
        assert result.total_moves == 2
        assert result.end_reason == "Commands finished"

    def test_submit_waits_for_lexicon(self):
        future = Future()
        session = scripted_session("CAT", validator=AsyncWordList(future))
        session.run(["drop 0", "drop 1", "drop 2", "trace 0,7 1,7 2,7", "submit"])
        assert session.moves[-1].code == "VALIDATOR_NOT_READY"

        future.set_result(WordList(["cat"]))
        session.wait_for_lexicon(timeout=1)
        assert session.execute("submit").code == "VALID_WORD"

    def test_failed_lexicon_load_is_reported(self):
        future = Future()
        session = scripted_session("CAT", validator=AsyncWordList(future))
        future.set_exception(FileNotFoundError("words.txt"))
        session.run(["drop 0", "drop 1", "drop 2", "trace 0,7 1,7 2,7", "submit"])
        assert session.moves[-1].code == "VALIDATOR_FAILED"
        assert "words.txt" in session.moves[-1].message

    def test_verbose_output(self, capsys):
        session = scripted_session("CAT")
        session.run(["drop 0", "jump"], verbose=True)
        out = capsys.readouterr().out
        assert "DROPPED" in out
        assert "Invalid command: 'jump'" in out
        assert "Session complete" in out


class TestSessionResult:
    """Test session results and saving them."""

    def test_words_found(self):
        session = scripted_session("CABTAG")
        result = session.run([
            "drop 0", "drop 1", "drop 2", "trace 0,7 1,7 2,7", "submit",
            "drop 0", "drop 1", "drop 2", "trace 0,7 1,7 2,7", "submit",
        ])
        assert result.words_found == ["cab", "tag"]
        assert result.final_state.score == 7 + 4
        assert result.final_state.delete_credits == 1

    def test_game_over_end_reason(self):
        session = GameSession.create(validator=WordList(WORDS))
        commands = [f"drop {col}" for col in range(8) for _ in range(8)]
        result = session.run(commands)
        assert result.final_state.game_over is True
        assert result.end_reason.startswith("Game over")

    def test_save_result(self, tmp_path):
        session = scripted_session("CAT")
        session.run(["drop 0", "drop 1", "drop 2", "trace 0,7 1,7 2,7", "submit"])

        path = tmp_path / "results" / "game.json"
        session.save_result(path)

        data = json.loads(path.read_text())
        assert data["total_moves"] == 5
        assert data["words_found"] == ["cat"]
        assert data["final_state"]["score"] == 5
        assert data["moves"][0]["code"] == "DROPPED"
        assert data["grid"].startswith("0 1 2")


class TestCli:
    """Test configuration loading and the command-line entry point."""

    def test_load_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("seed: 9\ncommands:\n  - drop 3\n  - submit\n")
        config = load_config(str(path))
        assert config.seed == 9
        assert config.commands == ["drop 3", "submit"]
        assert config.word_list is None

    def test_load_empty_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == GameConfig()

    def test_load_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_load_script(self, tmp_path):
        path = tmp_path / "moves.txt"
        path.write_text("# opening\ndrop 3\nsubmit\n")
        assert load_script(str(path)) == ["drop 3", "submit"]

    def test_load_bad_script(self, tmp_path):
        path = tmp_path / "moves.txt"
        path.write_text("drop 3\nfly\n")
        with pytest.raises(ValueError, match="line 2"):
            load_script(str(path))

    def test_main_runs_config(self, tmp_path, capsys):
        config_path = tmp_path / "config.yaml"
        output_path = tmp_path / "out" / "game.json"
        config_path.write_text("seed: 1\ncommands:\n  - drop 3\n  - left\n  - drop\n")

        argv = ["letter-drop", str(config_path), "--output", str(output_path)]
        with patch.object(sys, "argv", argv):
            assert main() == 0

        data = json.loads(output_path.read_text())
        assert data["total_moves"] == 3
        assert data["config"]["seed"] == 1
        assert "=== Game Summary ===" in capsys.readouterr().out

    def test_main_with_script_and_word_list(self, tmp_path):
        script = tmp_path / "moves.txt"
        script.write_text("drop 0\ndrop 0\n")
        words = tmp_path / "words.txt"
        words.write_text("cat\n")
        output_path = tmp_path / "game.json"

        argv = [
            "letter-drop", "--script", str(script), "--word-list", str(words),
            "--seed", "2", "--output", str(output_path),
        ]
        with patch.object(sys, "argv", argv):
            main()

        data = json.loads(output_path.read_text())
        assert data["config"]["word_list"] == str(words)
        assert data["total_moves"] == 2

    def test_main_without_commands_exits(self, capsys):
        with patch.object(sys, "argv", ["letter-drop"]):
            with pytest.raises(SystemExit) as exc:
                main()
        assert exc.value.code == 1
        assert "no commands" in capsys.readouterr().err

    def test_main_missing_config_exits(self, tmp_path):
        with patch.object(sys, "argv", ["letter-drop", str(tmp_path / "nope.yaml")]):
            with pytest.raises(SystemExit):
                main()

    def test_main_interactive(self, tmp_path, capsys):
        output_path = tmp_path / "game.json"
        argv = ["letter-drop", "--interactive", "--output", str(output_path)]
        inputs = iter(["drop 2", "", "quit"])

        with patch.object(sys, "argv", argv), patch("builtins.input", lambda _: next(inputs)):
            main()

        data = json.loads(output_path.read_text())
        assert data["total_moves"] == 1
        assert data["moves"][0]["command"] == "drop 2"
        assert data["end_reason"] == "Interactive session ended"
        assert "End reason: Interactive session ended" in capsys.readouterr().out
