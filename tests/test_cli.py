import pytest

from gui import main, make_store, parse_args
from storage import JsonHighScoreStore, MemoryHighScoreStore


def test_defaults():
    args = parse_args([])
    assert args.high_score_file is None
    assert not args.no_save
    assert args.cell_size == 26
    assert args.log_level == "WARNING"


def test_make_store(tmp_path):
    path = str(tmp_path / "hs.json")

    store = make_store(parse_args(["--high-score-file", path]))
    assert isinstance(store, JsonHighScoreStore)
    assert store.path == path

    assert isinstance(make_store(parse_args(["--no-save"])), MemoryHighScoreStore)


def test_rejects_bad_cell_size():
    with pytest.raises(SystemExit):
        main(["--cell-size", "2"])
