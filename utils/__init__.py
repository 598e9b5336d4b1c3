"""Shared utilities for the fact board and its store service."""

from utils.config import AppConfig, BoardConfig, Config

__all__ = ["AppConfig", "BoardConfig", "Config"]
