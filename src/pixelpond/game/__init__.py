from .engine import GameEngine
from .entities import FishInstance
from .scheduler import FrameScheduler, ManualScheduler
from .state import GameSession, GameState

__all__ = ["FishInstance", "FrameScheduler", "GameEngine", "GameSession", "GameState", "ManualScheduler"]
