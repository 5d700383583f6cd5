"""Train and Segment - rigid points moving along the committed track list.

A Segment carries a signed speed, the index of the piece it is on and the
distance travelled into that piece. Segments never hold piece references,
only indices, so the committed list can grow underneath them.

A Train is an ordered list of segments plus a display colour. Consecutive
segment pairs form one car; the pairing only matters for drawing.
"""

import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

from railplanner.constants import TrainConfig
from railplanner.core.grid import Point
from railplanner.model.track_piece import TrackPiece

Colour = tuple[float, float, float, float]  # RGBA, 0-1


@dataclass
class Segment:
    """One rigid moving point of a train.

    Attributes:
        speed: Signed speed in pixels per second (negative = towards index 0)
        track_index: Index of the committed piece the segment is on
        distance: Distance travelled into that piece, in [0, length] after update
        position: Cached point for the renderer (None before the first update)
    """

    speed: float
    track_index: int
    distance: float
    position: Optional[Point] = None

    def update(self, delta_time: float, tracks: Sequence[TrackPiece]) -> None:
        """Advance along the track and refresh the cached position.

        Running past the last piece clamps to its end and reverses the
        segment; running before the first piece clamps to 0 and reverses.

        Args:
            delta_time: Elapsed time in seconds
            tracks: Committed track list (read only)

        Raises:
            IndexError: If track_index is not a valid committed index.
        """
        if not 0 <= self.track_index < len(tracks):
            raise IndexError(f"Track index {self.track_index} outside committed list of {len(tracks)}")

        piece = tracks[self.track_index]
        length = piece.length
        self.distance += self.speed * delta_time

        while self.distance > length or self.distance < 0:
            if self.distance > length:
                if self.track_index + 1 < len(tracks):
                    self.distance -= length
                    self.track_index += 1
                    piece = tracks[self.track_index]
                    length = piece.length
                else:
                    self.distance = length
                    self.speed = -abs(self.speed)
            else:
                if self.track_index > 0:
                    self.track_index -= 1
                    piece = tracks[self.track_index]
                    length = piece.length
                    self.distance += length
                else:
                    self.distance = 0.0
                    self.speed = abs(self.speed)

        self.position = piece.position_at(self.distance / length)


@dataclass
class Train:
    """A set of segments sharing a colour.

    Created on a user action and never restructured afterwards.

    Attributes:
        segments: Ordered segments, pairs of consecutive segments form cars
        colour: RGBA display colour
    """

    segments: list[Segment]
    colour: Colour = (0.0, 0.0, 1.0, 1.0)
    id: str = field(default="")

    @classmethod
    def create(
        cls,
        speed: float = TrainConfig.DEFAULT_SPEED,
        track_index: int = 0,
        distance: float = 0.0,
        cars: int = TrainConfig.DEFAULT_CARS,
        car_length: float = TrainConfig.CAR_LENGTH,
        car_gap: float = TrainConfig.CAR_GAP,
        rng: Optional[random.Random] = None,
        train_id: str = "",
    ) -> "Train":
        """Lay out a train of cars starting at one point on the track.

        Each car is two segments car_length apart; cars are separated by
        car_gap. All segments start on the same piece; the first update moves
        any that overhang onto the following pieces.

        Args:
            speed: Shared initial speed
            track_index: Piece the train starts on
            distance: Distance into that piece of the first segment
            cars: Number of cars
            car_length: Segment spacing within a car
            car_gap: Spacing between cars
            rng: Random source for the colour (unseeded if omitted)
            train_id: Identifier for logs
        """
        rng = rng or random.Random()
        colour = (rng.uniform(0.0, 1.0), rng.uniform(0.0, 1.0), rng.uniform(0.0, 1.0), 1.0)

        segments = []
        offset = distance
        for _ in range(cars):
            segments.append(Segment(speed=speed, track_index=track_index, distance=offset))
            segments.append(Segment(speed=speed, track_index=track_index, distance=offset + car_length))
            offset += car_length + car_gap

        return cls(segments=segments, colour=colour, id=train_id)

    def update(self, delta_time: float, tracks: Sequence[TrackPiece]) -> None:
        """Advance every segment by one tick."""
        for segment in self.segments:
            segment.update(delta_time=delta_time, tracks=tracks)

    @property
    def positions(self) -> list[Optional[Point]]:
        """Cached segment positions, in segment order."""
        return [segment.position for segment in self.segments]

    def car_links(self) -> list[tuple[Point, Point]]:
        """Point pairs to draw a line between for each car.

        Cars whose segments have not been positioned yet are skipped.
        """
        links = []
        for front, back in zip(self.segments[0::2], self.segments[1::2]):
            if front.position is not None and back.position is not None:
                links.append((front.position, back.position))
        return links
