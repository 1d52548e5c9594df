from dataclasses import dataclass, asdict, replace
from typing import Optional

ALGORITHMS = ("dfs", "prim")


@dataclass
class MazeConfig:
    width: int = 8
    height: int = 8
    cell_size: int = 32  # pixels per cell, only used by renderers
    algo: str = "dfs"
    seed: Optional[int] = None

    def validate(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Maze dimensions must be positive, got {self.width}x{self.height}")
        if self.cell_size < 1:
            raise ValueError(f"Cell size must be positive, got {self.cell_size}")
        if self.algo not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm '{self.algo}' (choose from {', '.join(ALGORITHMS)})")
        return self

    def merged(self, **overrides) -> "MazeConfig":
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def as_dict(self):
        return asdict(self)
