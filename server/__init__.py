"""Gymote relay server: pairs a screen with up to two phone remotes."""

__version__ = "1.0.0"
