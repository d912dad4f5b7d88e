from .session import build_engine, build_sessionmaker, init_models
from .utils import apply_dict_updates

__all__ = ["build_engine", "build_sessionmaker", "init_models", "apply_dict_updates"]
