from minestake import cli
from minestake.placement import PlacementStrategy


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.balance == 1000.0
    assert args.log_file == "game_log.txt"
    assert args.seed == -1
    assert args.strategy == ""


def test_main_builds_configured_game(monkeypatch, tmp_path):
    captured = {}
    monkeypatch.setattr(cli, "play_cli", lambda game: captured.setdefault("game", game))

    log = tmp_path / "log.txt"
    cli.main(["--balance", "250", "--seed", "7", "--strategy", "min_distance",
              "--no-animation", "--log-file", str(log)])

    game = captured["game"]
    assert game.player.balance == 250.0
    assert game.strategy is PlacementStrategy.MIN_DISTANCE
    assert game.animations is False
    assert game.history.path == log
    assert game.rng is not None


def test_main_quits_on_eof(monkeypatch, capsys):
    def boom(game):
        raise EOFError

    monkeypatch.setattr(cli, "play_cli", boom)
    cli.main(["--no-animation"])
    assert "Quit." in capsys.readouterr().out
