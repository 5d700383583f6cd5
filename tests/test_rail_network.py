"""Tests for RailNetwork: laying, committing and persisting track."""

import json

import pytest

from railplanner.constants import GridConfig, StorageConfig
from railplanner.core.grid import Connection, Direction, Position
from railplanner.model.rail_network import RailNetwork
from railplanner.model.track_piece import Straight


class TestLaying:
    """Start, preview and commit."""

    def test_new_network_is_empty(self, grid: GridConfig) -> None:
        network = RailNetwork(grid=grid)
        assert network.is_empty
        assert network.head is None
        assert network.preview is None

    def test_propose_builds_preview_without_committing(self, grid: GridConfig) -> None:
        network = RailNetwork(grid=grid)
        network.place_start(Connection.at(0, 320, Direction.RIGHT))
        preview = network.propose(goal=Position(320, 320))

        assert preview is not None
        assert len(preview) == 10
        assert all(isinstance(p, Straight) for p in preview)
        assert network.is_empty

    def test_commit_appends_and_advances_head(self, laid_network: RailNetwork) -> None:
        assert len(laid_network) == 10
        assert laid_network.head == Connection.at(320, 320, Direction.RIGHT)
        assert laid_network.preview is None
        assert laid_network.total_length == pytest.approx(320.0)

    def test_commit_returns_new_indices(self, laid_network: RailNetwork) -> None:
        laid_network.propose(goal=Position(384, 320))
        assert laid_network.commit_preview() == [10, 11]

    def test_extension_continues_from_head(self, laid_network: RailNetwork) -> None:
        before = laid_network.pieces
        laid_network.propose(goal=Position(512, 448))
        laid_network.commit_preview()

        assert laid_network.pieces[: len(before)] == before
        assert laid_network[len(before)].start == before[-1].end
        for prev, nxt in zip(laid_network, laid_network.pieces[1:]):
            assert prev.end == nxt.start

    def test_unreachable_goal_leaves_no_preview(self, laid_network: RailNetwork) -> None:
        assert laid_network.propose(goal=Position(5, 5)) is None
        assert laid_network.preview is None
        assert len(laid_network) == 10

    def test_discard_preview(self, laid_network: RailNetwork) -> None:
        laid_network.propose(goal=Position(384, 320))
        laid_network.discard_preview()
        assert laid_network.preview is None

    def test_propose_without_start_raises(self, grid: GridConfig) -> None:
        with pytest.raises(ValueError):
            RailNetwork(grid=grid).propose(goal=Position(320, 320))

    def test_commit_without_preview_raises(self, laid_network: RailNetwork) -> None:
        with pytest.raises(ValueError, match="No preview"):
            laid_network.commit_preview()

    def test_start_is_locked_after_commit(self, laid_network: RailNetwork) -> None:
        with pytest.raises(ValueError):
            laid_network.place_start(Connection.at(0, 0, Direction.UP))
        with pytest.raises(ValueError):
            laid_network.clear_start()

    def test_start_can_move_before_commit(self, grid: GridConfig) -> None:
        network = RailNetwork(grid=grid)
        network.place_start(Connection.at(0, 320, Direction.RIGHT))
        network.propose(goal=Position(320, 320))
        network.place_start(Connection.at(64, 16, Direction.UP))

        assert network.head == Connection.at(64, 16, Direction.UP)
        assert network.preview is None


class TestSerialization:
    """to_dict/from_dict and JSON files."""

    def test_dict_layout(self, laid_network: RailNetwork) -> None:
        data = laid_network.to_dict()

        assert data["version"] == StorageConfig.FORMAT_VERSION
        assert data["grid"]["cell_size"] == 32
        assert data["head"] == {"x": 320, "y": 320, "direction": "RIGHT"}
        assert data["pieces"][0] == {
            "type": "straight",
            "start": {"x": 0, "y": 320, "direction": "RIGHT"},
            "end": {"x": 32, "y": 320, "direction": "RIGHT"},
        }

    def test_save_and_load(self, laid_network: RailNetwork, tmp_path) -> None:
        laid_network.propose(goal=Position(512, 448))
        laid_network.commit_preview()
        path = tmp_path / "saves" / "network.json"

        laid_network.save(path)
        loaded = RailNetwork.load(path)

        assert loaded.pieces == laid_network.pieces
        assert loaded.head == laid_network.head
        assert loaded.grid == laid_network.grid
        assert loaded.total_length == pytest.approx(laid_network.total_length)
        assert json.loads(path.read_text(encoding="utf-8"))["version"] == StorageConfig.FORMAT_VERSION

    def test_loaded_network_keeps_growing(self, laid_network: RailNetwork) -> None:
        loaded = RailNetwork.from_dict(laid_network.to_dict())
        loaded.propose(goal=Position(384, 320))

        assert loaded.commit_preview() == [10, 11]

    def test_empty_network_round_trip(self, grid: GridConfig) -> None:
        loaded = RailNetwork.from_dict(RailNetwork(grid=grid).to_dict())
        assert loaded.is_empty
        assert loaded.head is None

    def test_save_defaults_to_output_dir(self, laid_network: RailNetwork, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr("railplanner.model.rail_network.OUTPUT_DIR", tmp_path)

        path = laid_network.save()

        assert path == tmp_path / StorageConfig.DEFAULT_FILENAME
        assert len(RailNetwork.load(path)) == 10

    def test_canvas_mode_survives_round_trip(self) -> None:
        network = RailNetwork(grid=GridConfig(inclusive_bounds=True))
        loaded = RailNetwork.from_dict(network.to_dict())
        assert loaded.grid.inclusive_bounds is True

    def test_files_without_canvas_mode_load_exclusive(self, laid_network: RailNetwork) -> None:
        data = laid_network.to_dict()
        del data["grid"]["inclusive_bounds"]
        assert RailNetwork.from_dict(data).grid.inclusive_bounds is False
