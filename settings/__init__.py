from .store import Difficulty, GameSettings, load_settings

__all__ = ['Difficulty', 'GameSettings', 'load_settings']
