"""World - the committed network, the laying workflow and the trains.

The frame loop (outside this package) calls tick() once per frame with the
elapsed time, then reads snapshot() to draw. Input handlers forward snapped
goals and commit signals to the state machine between ticks, so a tick never
sees the committed list change underneath it.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from railplanner.constants import GridConfig, TrainConfig
from railplanner.control.state_machine import LayingContext, TrackLayingStateMachine
from railplanner.core.grid import Point
from railplanner.model.rail_network import RailNetwork
from railplanner.model.train import Colour, Train

logger = logging.getLogger(__name__)


@dataclass
class TrainSnapshot:
    """What the renderer needs to draw one train."""

    id: str
    colour: Colour
    positions: list[Point]
    car_links: list[tuple[Point, Point]]


class World:
    """Simulation root owning the network and every train.

    Example:
        world = World(grid=GridConfig())
        world.machine.place_start(connection=Connection.at(32, 16, Direction.RIGHT))
        world.machine.propose_path(goal=Position(320, 16))
        world.machine.commit_preview()
        world.spawn_train()
        world.tick(1 / 60)
    """

    def __init__(self, grid: Optional[GridConfig] = None, seed: Optional[int] = None) -> None:
        self.grid = grid or GridConfig()
        self.context = LayingContext(network=RailNetwork(grid=self.grid))
        self.machine = TrackLayingStateMachine(context=self.context)
        self.trains: list[Train] = []
        self._rng = random.Random(seed)
        self._train_counter = 0

    @property
    def network(self) -> RailNetwork:
        return self.context.network

    def spawn_train(
        self,
        speed: float = TrainConfig.DEFAULT_SPEED,
        track_index: int = 0,
        distance: float = 0.0,
        cars: int = TrainConfig.DEFAULT_CARS,
    ) -> Train:
        """Place a new train on the committed track.

        Raises:
            ValueError: If nothing is committed or track_index is out of range.
        """
        if not 0 <= track_index < len(self.network):
            raise ValueError(f"Cannot place a train on piece {track_index} of {len(self.network)} committed")

        self._train_counter += 1
        train = Train.create(
            speed=speed,
            track_index=track_index,
            distance=distance,
            cars=cars,
            rng=self._rng,
            train_id=f"T{self._train_counter}",
        )
        self.trains.append(train)
        logger.info(f"Train {train.id} spawned on piece {track_index} with {cars} car(s)")
        return train

    def tick(self, delta_time: float) -> None:
        """Advance every train against the committed list."""
        tracks = self.network.pieces
        for train in self.trains:
            train.update(delta_time=delta_time, tracks=tracks)

    def snapshot(self) -> list[TrainSnapshot]:
        """Positions and car links of every positioned train."""
        return [
            TrainSnapshot(
                id=train.id,
                colour=train.colour,
                positions=[p for p in train.positions if p is not None],
                car_links=train.car_links(),
            )
            for train in self.trains
        ]
