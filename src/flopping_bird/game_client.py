"""
game_client.py

Pygame window: captures flap input and draws engine snapshots.
Holds no game logic of its own.
"""

import functools
import logging
import random
from typing import Optional

import pygame

from .config import GameConfig
from .constants import TICK_RATE
from .physics_engine import GameEngine
from .score_store import BestScoreStore
from .snapshot import FrameSnapshot

log = logging.getLogger(__name__)

POWERUP_COLORS = {
    "shield": (80, 200, 255),
    "shrink": (255, 120, 220),
    "slow_time": (160, 255, 120),
    "area_clear": (255, 255, 255),
}
POWERUP_LABELS = {"shield": "S", "shrink": "T", "slow_time": "Z", "area_clear": "X"}
WHITE = (255, 255, 255)


def hsl(h: float, s: float, l: float) -> pygame.Color:
    color = pygame.Color(0, 0, 0)
    color.hsla = (h % 360, s, l, 100)
    return color


def to_color(value: str) -> pygame.Color:
    """Accepts pygame colour names, hex codes and 'hsl(h, s%, l%)' strings."""
    if value.startswith("hsl"):
        parts = value[value.index("(") + 1:value.index(")")].replace("%", "").split(",")
        h, s, l = (float(p) for p in parts)
        return hsl(h, s, l)
    return pygame.Color(value)


@functools.lru_cache(maxsize=None)
def text_font(size: int) -> pygame.font.Font:
    """Default font at size, built once per size."""
    return pygame.font.Font(None, size)


class FlappyClient:
    def __init__(self, engine: GameEngine):
        pygame.init()
        self.engine = engine
        cfg = engine.config
        self.size = (int(cfg.width), int(cfg.height))
        self.screen = pygame.display.set_mode(self.size)
        pygame.display.set_caption(f"Flopping Bird ({cfg.variant.value})")
        self.canvas = pygame.Surface(self.size)
        self.clock = pygame.time.Clock()
        self.large_font = pygame.font.Font(None, 48)
        self.font = pygame.font.Font(None, 26)

    def run(self):
        """The main client execution loop: input, one tick, draw."""
        running = True
        while running:
            self.clock.tick(TICK_RATE)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                    self.engine.trigger_impulse()
                elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
                    self.engine.trigger_impulse()

            self._draw(self.engine.tick())

    def _draw(self, snap: FrameSnapshot):
        cfg = self.engine.config
        canvas = self.canvas

        # Background grid scrolling with the run
        bg_hue = snap.frame * 0.2
        canvas.fill(hsl(bg_hue, 30, 15))
        grid = 40
        offset = (snap.frame * snap.speed) % grid
        line = hsl(bg_hue, 100, 25)
        x = -offset
        while x < self.size[0]:
            pygame.draw.line(canvas, line, (x, 0), (x, self.size[1]))
            x += grid
        for y in range(0, self.size[1], grid):
            pygame.draw.line(canvas, line, (0, y), (self.size[0], y))

        for p in snap.particles:
            pygame.draw.rect(canvas, to_color(p["color"]), (p["x"], p["y"], p["size"], p["size"]))

        floor_y = cfg.height if snap.terrain else cfg.floor_y
        for pipe in snap.pipes:
            color = hsl(pipe["hue"], 60, 50)
            width = 2 if pipe["neutralized"] else 0
            bottom_y = pipe["top_height"] + pipe["gap"]
            pygame.draw.rect(canvas, color, (pipe["x"], 0, pipe["width"], pipe["top_height"]), width)
            pygame.draw.rect(canvas, color, (pipe["x"], bottom_y, pipe["width"], floor_y - bottom_y), width)

        hue = snap.frame % 360
        if snap.terrain:
            outline = [(pt["x"], cfg.height - pt["height"]) for pt in snap.terrain]
            polygon = outline + [(outline[-1][0], cfg.height), (outline[0][0], cfg.height)]
            pygame.draw.polygon(canvas, hsl(hue, 50, 40), polygon)
        else:
            pygame.draw.rect(canvas, hsl(hue, 50, 50), (0, cfg.floor_y, cfg.width, cfg.ground_height))

        for item in snap.collectibles:
            center = (int(item["x"]), int(item["y"]))
            pygame.draw.circle(canvas, POWERUP_COLORS[item["kind"]], center, int(item["radius"]))
            label = self.font.render(POWERUP_LABELS[item["kind"]], True, (0, 0, 0))
            canvas.blit(label, label.get_rect(center=center))

        for hazard in snap.hazards:
            x, y, s = hazard["x"], hazard["y"], hazard["size"]
            if hazard["kind"] == "ghost":
                pygame.draw.circle(canvas, (220, 220, 255), (int(x), int(y)), int(s))
            else:
                pygame.draw.polygon(canvas, (255, 90, 40), [(x - s, y), (x + s, y - s / 2), (x + s, y + s / 2)])

        self._draw_avatar(snap, hue)

        for t in snap.texts:
            font = text_font(max(8, int(32 * t["scale"])))
            surf = font.render(t["text"], True, hsl(t["hue"], 100, 50))
            canvas.blit(surf, surf.get_rect(center=(t["x"], t["y"])))

        # Shake the whole world, not the HUD
        dx = dy = 0
        if snap.shake > 0:
            dx = random.uniform(-snap.shake / 2, snap.shake / 2)
            dy = random.uniform(-snap.shake / 2, snap.shake / 2)
        self.screen.fill((0, 0, 0))
        self.screen.blit(canvas, (dx, dy))
        self._draw_hud(snap)
        pygame.display.flip()

    def _draw_avatar(self, snap: FrameSnapshot, hue: float):
        a = snap.avatar
        center = pygame.Vector2(a["x"], a["y"])
        radius = a["radius"]
        pygame.draw.circle(self.canvas, hsl(hue, 70, 60), center, radius)
        pygame.draw.circle(self.canvas, WHITE, center, radius, 2)
        beak = center + pygame.Vector2(radius + 5, 0).rotate_rad(a["rotation"])
        pygame.draw.line(self.canvas, (241, 196, 15), center, beak, 4)
        if "invincible" in a["effects"]:
            pygame.draw.circle(self.canvas, POWERUP_COLORS["shield"], center, radius + 5, 2)

    def _draw_hud(self, snap: FrameSnapshot):
        screen = self.screen
        w, h = self.size
        score = self.large_font.render(str(snap.score), True, WHITE)
        screen.blit(score, (w // 2 - score.get_width() // 2, 20))
        best = self.font.render(f"Best: {snap.best_score}", True, WHITE)
        screen.blit(best, (10, 10))

        if snap.status == "active":
            return
        overlay = pygame.Surface(self.size, pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 180))
        screen.blit(overlay, (0, 0))
        if snap.status == "not_started":
            lines = [("FLOPPING BIRD", self.large_font), ("Tap / Space to Flop", self.font)]
        else:
            lines = [("WASTED", self.large_font), (f"Score: {snap.score}", self.font),
                     ("Tap to suffer again", self.font)]
        for i, (text, font) in enumerate(lines):
            surf = font.render(text, True, WHITE)
            screen.blit(surf, surf.get_rect(center=(w // 2, h // 2 - 40 + i * 40)))


def main(variant: str = "advanced", db_file: Optional[str] = None):
    config = GameConfig.for_variant(variant)
    store = BestScoreStore(db_file) if db_file else BestScoreStore()
    engine = GameEngine(config, store=store)
    log.info("Starting %s variant, best score %d", variant, engine.best_score)
    client = FlappyClient(engine)
    try:
        client.run()
    except KeyboardInterrupt:
        pass
    finally:
        store.close()
        text_font.cache_clear()
        pygame.quit()
