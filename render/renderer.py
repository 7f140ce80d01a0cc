import pygame

from eval.rollout import walk


class MazeRenderer:
    def __init__(self, maze, cell_size=24):
        self.maze = maze
        self.cell = cell_size

        self.width_px = maze.size * self.cell
        self.height_px = maze.size * self.cell

        # Off-screen until show() opens a window
        self.screen = pygame.Surface((self.width_px, self.height_px))

        self.colors = {
            "bg": (30, 30, 30),
            "wall": (230, 230, 230),
            "start": (0, 200, 0),
            "goal": (200, 0, 0),
            "path": (50, 100, 255),
            "stop": (255, 200, 0),
        }

    def _cell_rect(self, x, y):
        return pygame.Rect(x * self.cell, y * self.cell, self.cell, self.cell)

    def _cell_center(self, x, y):
        return (x * self.cell + self.cell // 2, y * self.cell + self.cell // 2)

    # =====================
    # DRAW MAZE
    # =====================
    def draw(self):
        self.screen.fill(self.colors["bg"])

        for x, y in self.maze.walls():
            pygame.draw.rect(self.screen, self.colors["wall"], self._cell_rect(x, y))

        pygame.draw.rect(self.screen, self.colors["start"], self._cell_rect(*self.maze.start))
        pygame.draw.rect(self.screen, self.colors["goal"], self._cell_rect(*self.maze.target))

        return self.screen

    # =====================
    # DRAW GENOME PATH
    # =====================
    def draw_genome(self, genome):
        result = walk(genome, self.maze)

        points = [self._cell_center(x, y) for x, y in result.path]
        if len(points) > 1:
            pygame.draw.lines(self.screen, self.colors["path"], False, points, max(3, self.cell // 5))

        end_color = self.colors["stop"] if result.hit_wall else self.colors["path"]
        pygame.draw.circle(self.screen, end_color, points[-1], max(3, self.cell // 3))

        return result

    def render(self, genome=None):
        self.draw()
        if genome is not None:
            self.draw_genome(genome)
        return self.screen

    def save(self, path, genome=None):
        pygame.image.save(self.render(genome), path)

    def show(self, genome=None, caption="Maze Agent"):
        pygame.init()
        window = pygame.display.set_mode((self.width_px, self.height_px))
        pygame.display.set_caption(caption)

        window.blit(self.render(genome), (0, 0))
        pygame.display.flip()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
        pygame.quit()
