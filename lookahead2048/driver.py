"""Turn loop that plays a game through an external session."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from lookahead2048.game import Board, Move


class GameStatus(Enum):
    NONE = 'none'
    WON = 'won'
    LOST = 'lost'


class TurnState(Enum):
    PLAYING = 'playing'
    TERMINATED = 'terminated'


class CollaboratorError(Exception):
    """Raised by a GameSession when the live game can't be reached."""


class UnreadableStateError(CollaboratorError):
    """The session could not produce a board."""


class DispatchError(CollaboratorError):
    """The session could not deliver a move."""


class GameSession(ABC):
    """
    Connection to a running game.

    Implementations wrap whatever hosts the game (a browser page, an API,
    or the local simulator) and translate it to Boards and Moves.
    """

    @abstractmethod
    def read_board(self) -> Board:
        """
        Snapshot the current tiles

        Raises:
            UnreadableStateError: if the game state can't be read
        """
        pass

    @abstractmethod
    def apply_move(self, move: Move) -> None:
        """
        Perform a move in the live game

        Raises:
            DispatchError: if the move could not be delivered
        """
        pass

    @abstractmethod
    def status(self) -> GameStatus:
        pass


@dataclass
class GameResult:
    turns: int = 0
    status: GameStatus = GameStatus.NONE
    reason: str = ''
    moves: List[Move] = field(default_factory=list)
    error: Optional[CollaboratorError] = None


class TurnLoop:
    """
    Play until the session reports a win or loss.

    Each turn reads the board, asks the strategy for a move, sends it and
    checks the session's status. A strategy returning None ends the game
    even if the session hasn't noticed yet. Collaborator errors stop the
    loop; they are recorded on the result rather than retried.
    """

    def __init__(
        self,
        session: GameSession,
        strategy: Callable[[Board], Optional[Move]],
        max_turns: Optional[int] = None,
        verbose: bool = False,
    ):
        self.session = session
        self.strategy = strategy
        self.max_turns = max_turns
        self.verbose = verbose
        self.state = TurnState.PLAYING
        self.result = GameResult()

    def _terminate(self, reason: str):
        self.state = TurnState.TERMINATED
        self.result.reason = reason
        if self.verbose:
            print(f"Game ended after {self.result.turns} turns: {reason}")

    def step(self) -> TurnState:
        """Play a single turn; does nothing once terminated."""
        if self.state is TurnState.TERMINATED:
            return self.state

        try:
            board = self.session.read_board()
            move = self.strategy(board)
            if move is None:
                self.result.status = GameStatus.LOST
                self._terminate('stuck')
                return self.state

            self.session.apply_move(move)
            self.result.turns += 1
            self.result.moves.append(move)
            if self.verbose:
                print(f"Turn {self.result.turns}: {move.value}")

            status = self.session.status()
        except CollaboratorError as e:
            print(f"Session error on turn {self.result.turns + 1}: {e}")
            self.result.error = e
            self._terminate('error')
            return self.state

        self.result.status = status
        if status is not GameStatus.NONE:
            self._terminate(status.value)
        elif self.max_turns is not None and self.result.turns >= self.max_turns:
            self._terminate('max_turns')
        return self.state

    def run(self) -> GameResult:
        while self.state is TurnState.PLAYING:
            self.step()
        return self.result
