"""Rail Planner - lay track on a grid and run trains along it.

A grid-based track-building engine featuring:
- Implicit connection graph of buildable track from any oriented anchor
- A* path planning from an oriented start to a goal position
- Straight, diagonal and fixed-radius turn geometry with interpolation
- Trains of rigid segments bouncing along the committed track list

Modules:
    core: Grid value types (Position, Point, Direction, Connection)
    generators: Connection graph, A* pathfinder, track assembler
    model: Track pieces, rail network, trains
    control: Track-laying state machine and the simulation world

Example:
    from railplanner.constants import GridConfig
    from railplanner.control.world import World
    from railplanner.core.grid import Connection, Direction, Position
"""
