"""Test parsing of terminal commands."""

import pytest

from connections_helper.errors import CommandError
from connections_helper.puzzle import Command, parse_command


class TestValidCommands:
    """Commands that parse successfully."""

    def test_blank_line(self):
        assert parse_command("") is None
        assert parse_command("   ") is None

    def test_swap_is_one_based(self):
        assert parse_command("swap 1 16") == Command(name="swap", indices=(0, 15))

    def test_lock(self):
        assert parse_command("lock 3") == Command(name="lock", indices=(2,))

    def test_unlock_alias(self):
        assert parse_command("unlock 1") == Command(name="lock", indices=(0,))

    def test_move_with_quoted_words(self):
        command = parse_command('move "ice cream" pie')
        assert command == Command(name="move", words=("ice cream", "pie"))

    @pytest.mark.parametrize("line,name", [
        ("shuffle", "shuffle"),
        ("SHUFFLE", "shuffle"),
        ("sh", "shuffle"),
        ("retry", "retry"),
        ("help", "help"),
        ("?", "help"),
        ("q", "quit"),
        ("exit", "quit"),
    ])
    def test_bare_commands(self, line, name):
        assert parse_command(line).name == name

    def test_short_aliases(self):
        assert parse_command("s 2 3").indices == (1, 2)
        assert parse_command("l 4").indices == (3,)


class TestInvalidCommands:
    """Commands that raise CommandError."""

    @pytest.mark.parametrize("line", [
        "swap 1",
        "swap 1 2 3",
        "swap 0 1",
        "swap 1 17",
        "swap a b",
        "lock",
        "lock 5",
        "lock 0",
        "lock -1",
        "move onlyone",
        "shuffle now",
        "dance",
        'move "unterminated',
    ])
    def test_rejected(self, line):
        with pytest.raises(CommandError):
            parse_command(line)

    def test_unknown_command_message(self):
        with pytest.raises(CommandError, match="Unknown command: 'dance'"):
            parse_command("dance")
