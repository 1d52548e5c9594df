import logging

import numpy as np
import pygame

from perfect_maze.core.events import CompletedEvent, ProgressEvent
from perfect_maze.core.structure import GenerationHandle, MazeStructure, State
from perfect_maze.viz.raster import rasterize

logger = logging.getLogger(__name__)


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_BAR = (60, 100, 160)  # Blue tint
    COLOR_TEXT = (255, 255, 255)
    HUD_HEIGHT = 60

    def __init__(self, maze: MazeStructure, handle: GenerationHandle = None):
        self.maze = maze
        self.handle = handle
        self.cell_size = maze.config.cell_size

        self.progress = 0
        self.error = None
        self.running = True
        self.font = None
        self.clock = None
        self.surface = None
        self.maze_surface = None

    def init_window(self):
        pygame.init()
        config = self.maze.config
        width = max(config.width * self.cell_size, 320)
        height = config.height * self.cell_size + self.HUD_HEIGHT
        pygame.display.set_caption(f"Maze - {config.width}x{config.height}")
        self.surface = pygame.display.set_mode((width, height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

    def screen_to_cell(self, sx, sy):
        col = sx // self.cell_size
        row = (sy - self.HUD_HEIGHT) // self.cell_size
        return row, col

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self.maze.state is not State.COMPLETED:
                    continue
                row, col = self.screen_to_cell(*event.pos)
                if 0 <= row < self.maze.config.height and 0 <= col < self.maze.config.width:
                    cell = self.maze.cell_at(row, col)
                    self.maze.selected_cell_index = cell.index
                    logger.info("Selected cell %s, distance %d", cell.coordinates, self.maze.distance(cell))
                    self.maze_surface = None

    def pump_events(self):
        if self.handle is None:
            return
        for event in self.handle.events.poll():
            if isinstance(event, ProgressEvent):
                self.progress = event.percent
            elif isinstance(event, CompletedEvent):
                self.error = event.error
                self.maze_surface = None

    def draw_maze(self):
        if self.maze.state is not State.COMPLETED:
            return
        if self.maze_surface is None:
            # surfarray wants (width, height, 3)
            image = rasterize(self.maze, self.cell_size)
            self.maze_surface = pygame.surfarray.make_surface(np.transpose(image, (1, 0, 2)))
        self.surface.blit(self.maze_surface, (0, self.HUD_HEIGHT))

    def draw_hud(self):
        width = self.surface.get_width()
        pygame.draw.rect(self.surface, self.COLOR_BAR, (0, 0, width * self.progress // 100, 6))

        if self.error is not None:
            status = f"Failed: {self.error}"
        elif self.maze.state is State.COMPLETED:
            status = "Done"
        else:
            status = f"Generating... {self.progress}%"
        info = [status]

        selected = self.maze.selected_cell if self.maze.state is State.COMPLETED else None
        if selected is not None:
            info.append(f"Cell {selected.coordinates}  distance {selected.distance}")

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_TEXT)
            self.surface.blit(lbl, (10, 12 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.pump_events()

            self.surface.fill(self.COLOR_BG)
            self.draw_maze()
            self.draw_hud()
            pygame.display.flip()
            self.clock.tick(60)

        pygame.quit()
