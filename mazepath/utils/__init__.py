"""Maze generation, file formats and random sources."""
