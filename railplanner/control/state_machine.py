"""State machine for the track-laying workflow.

Uses python-statemachine for the build interaction:
- Clear state definitions
- Guarded transitions (conditions)
- Transition actions that drive the RailNetwork
- A listener for logging side effects

States:
    IDLE: Nothing placed yet (initial)
    LAYING: A line start (head) exists; previews can be proposed and committed

Transitions:
    IDLE -> LAYING: place_start (user picks the first anchor)
    LAYING -> LAYING: propose_path (goal under the cursor changed)
    LAYING -> LAYING: commit_preview (only when a preview exists)
    LAYING -> LAYING: discard_preview
    LAYING -> IDLE: cancel_line (only while nothing is committed)

The committed list is append-only, so once a piece is committed the line can
only grow from its head and cancel_line is refused.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from railplanner.constants import GridConfig
from railplanner.core.grid import Connection, Position
from railplanner.model.rail_network import RailNetwork

logger = logging.getLogger(__name__)


@dataclass
class LayingContext:
    """Shared model for the state machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model.
    """

    state: str | None = None
    network: RailNetwork = field(default_factory=lambda: RailNetwork(grid=GridConfig()))
    last_goal: Position | None = None

    def __repr__(self) -> str:
        return f"LayingContext(state={self.state}, network={self.network!r}, last_goal={self.last_goal})"


class LoggingListener:
    """Listener that logs every transition."""

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[STATE] {source.name} --({event})--> {target.name}")


class TrackLayingStateMachine(StateMachine):
    """Track-laying workflow over a RailNetwork.

    Example:
        sm, ctx = TrackLayingStateMachine.create()
        sm.place_start(connection=Connection.at(32, 16, Direction.RIGHT))
        sm.propose_path(goal=Position(320, 16))
        if sm.has_preview():
            sm.commit_preview()
    """

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    idle = State("Idle", initial=True)
    laying = State("Laying")

    # ==========================================================================
    # Transitions
    # ==========================================================================

    place_start = idle.to(laying)
    propose_path = laying.to(laying)
    commit_preview = laying.to(laying, cond="has_preview")
    discard_preview = laying.to(laying)
    cancel_line = laying.to(idle, cond="network_is_empty")

    # ==========================================================================
    # Guards (Conditions)
    # ==========================================================================

    def has_preview(self) -> bool:
        """Guard: a preview path is waiting to be committed."""
        return self.context.network.preview is not None

    def network_is_empty(self) -> bool:
        """Guard: nothing has been committed yet."""
        return self.context.network.is_empty

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_idle(self) -> bool:
        return self.idle.is_active

    @property
    def is_laying(self) -> bool:
        return self.laying.is_active

    # ==========================================================================
    # Transition Actions (before_* hooks)
    # ==========================================================================

    def before_place_start(self, connection: Connection) -> None:
        self.context.network.place_start(connection)

    def before_propose_path(self, goal: Position) -> None:
        self.context.last_goal = goal
        self.context.network.propose(goal=goal)

    def before_commit_preview(self) -> None:
        self.context.network.commit_preview()

    def before_discard_preview(self) -> None:
        self.context.network.discard_preview()

    def before_cancel_line(self) -> None:
        self.context.network.clear_start()
        self.context.last_goal = None

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: LayingContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or LayingContext()
        super().__init__(model=model, start_value=start_value)

    @property
    def context(self) -> LayingContext:
        """Alias for model."""
        return self.model

    def get_state_name(self) -> str:
        return self.current_state.name

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Args:
            event: Transition event name
            **kwargs: Arguments for transition

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    def __repr__(self) -> str:
        return f"TrackLayingStateMachine(state={self.get_state_name()}, model={self.context!r})"

    @staticmethod
    def create(
        grid: GridConfig | None = None,
        add_logging_listener: bool = True,
    ) -> tuple["TrackLayingStateMachine", LayingContext]:
        """Factory method to create a state machine with a fresh network.

        Args:
            grid: Grid geometry (defaults to GridConfig())
            add_logging_listener: If True, transitions are logged

        Returns:
            Tuple of (TrackLayingStateMachine, LayingContext)
        """
        context = LayingContext(network=RailNetwork(grid=grid or GridConfig()))
        sm = TrackLayingStateMachine(context=context)
        if add_logging_listener:
            sm.add_listener(LoggingListener())
        return sm, context
