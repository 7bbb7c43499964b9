import logging

import pytest

import play
from draughts import config


@pytest.fixture(autouse=True)
def fresh_config():
    config.reset_config()
    yield
    config.reset_config()


@pytest.mark.parametrize("value", ["0", "-5", "soon"])
def test_time_must_be_positive(value):
    with pytest.raises(SystemExit):
        play.parse_args(["--time", value])


def test_max_plies_must_be_positive():
    with pytest.raises(SystemExit):
        play.parse_args(["--max-plies", "0"])


def test_parse_args_defaults_follow_config():
    args = play.parse_args([])
    assert args.time == 1000
    assert args.size == 8
    assert args.white == "mcts"
    assert args.black == "random"


def test_random_game_runs_to_the_end(caplog):
    with caplog.at_level(logging.INFO, logger="play"):
        play.main(["--white", "random", "--black", "random", "--seed", "3", "--size", "6"])
    messages = [r.getMessage() for r in caplog.records if r.name == "play"]
    assert messages[0].startswith("1. ONE plays ")
    assert any(m.startswith(("Draw after", "ONE wins", "TWO wins", "Stopped after")) for m in messages)
