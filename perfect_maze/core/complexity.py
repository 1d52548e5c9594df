from collections import deque
from typing import Dict, List

from perfect_maze.core.cell import Cell, EAST, SOUTH
from perfect_maze.core.grid import Grid


class MazeAnalyzer:
    @staticmethod
    def open_wall_count(grid: Grid) -> int:
        """
        Number of opened wall-pairs (edges of the carved graph).
        Only EAST and SOUTH are counted so each shared wall is seen once.
        """
        count = 0
        for cell in grid.cells:
            if cell.neighbors[EAST] is not None and not cell.has_wall(EAST):
                count += 1
            if cell.neighbors[SOUTH] is not None and not cell.has_wall(SOUTH):
                count += 1
        return count

    @staticmethod
    def shortest_distances(grid: Grid, start: Cell) -> List[int]:
        """
        BFS over open walls. Returns a list indexed like grid.cells with the
        shortest distance from `start`, or -1 for unreachable cells.
        """
        dist = [-1] * len(grid.cells)
        dist[start.index] = 0
        queue = deque([start])

        while queue:
            current = queue.popleft()
            for other in grid.open_neighbors(current):
                if dist[other.index] == -1:
                    dist[other.index] = dist[current.index] + 1
                    queue.append(other)
        return dist

    @staticmethod
    def is_perfect(grid: Grid) -> bool:
        """Connected and acyclic: a spanning tree over every cell."""
        if MazeAnalyzer.open_wall_count(grid) != len(grid.cells) - 1:
            return False
        dist = MazeAnalyzer.shortest_distances(grid, grid.cells[0])
        return all(d >= 0 for d in dist)

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, float]:
        dead_ends = 0
        corridors = 0
        junctions = 0

        for cell in grid.cells:
            exits = cell.open_wall_count
            if exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            elif exits >= 3: junctions += 1

        total = len(grid.cells)
        return {
            "cells": total,
            "open_walls": MazeAnalyzer.open_wall_count(grid),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
