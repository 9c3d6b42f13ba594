"""
physics_engine.py: The authoritative per-tick world simulation.
"""

import logging
import random
from typing import Optional

from .config import GameConfig
from .data_models import Avatar, HazardKind, PowerUpKind, RunState, RunStatus, EffectKind
from .effects import burst, floating_text, update_particles, update_texts, decay_shake
from .constants import PRAISE_PHRASES
from .obstacles import gap_bounds, spawn_interval, make_pair, oscillate, has_passed, is_offscreen
from .physics_core import PhysicsCore, BoundaryEvent
from .pickups import (
    make_collectible, move_collectible, apply_power_up, make_hazard, move_hazard
)
from .pickups import is_offscreen as pickup_offscreen
from .score_store import BestScoreStore
from .snapshot import FrameSnapshot
from .terrain import TerrainProfile

log = logging.getLogger(__name__)


class GameEngine(PhysicsCore):
    """
    The engine managing the entire game state of one player.
    Inherits core physics and collision from PhysicsCore.

    The outside world talks to it through three calls: trigger_impulse()
    whenever the player flaps, tick() once per display refresh, and
    snapshot() (also returned by tick()) to draw the result.
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None,
                 store: Optional[BestScoreStore] = None):
        super().__init__(config)
        self.rng = random.Random(seed)
        self.store = store
        self.best_score = store.load() if store is not None else 0
        self.avatar = Avatar()
        self.run = RunState()
        self.terrain = TerrainProfile(self.config) if self.config.terrain_enabled else None
        self.pending_impulse = False
        self.reset()

    # ---------- Control surface ----------

    def trigger_impulse(self):
        """Queues a flap for the start of the next tick."""
        self.pending_impulse = True

    def reset(self):
        """Back to the pre-start state of a fresh run."""
        cfg = self.config
        self.respawn(self.avatar)
        self.run = RunState(
            base_speed=cfg.base_speed,
            speed=cfg.base_speed,
            next_ramp_score=cfg.speed_ramp_every,
        )
        if self.terrain is not None:
            self.terrain.reset(self.rng)
        self.pending_impulse = False

    def tick(self) -> FrameSnapshot:
        """
        The main simulation step. Consumes the queued impulse, applies the
        run state transition it causes, then advances the world one tick.
        """
        run = self.run
        impulse, self.pending_impulse = self.pending_impulse, False

        if run.status is RunStatus.ENDED and impulse:
            self.reset()
            log.info("Run reset")
            return self.snapshot()

        run.frame += 1

        if run.status is RunStatus.NOT_STARTED and impulse:
            run.status = RunStatus.ACTIVE
            log.info("Run started")

        if run.status is RunStatus.ACTIVE:
            if impulse:
                self._flap()
            self._step_active()

        run.shake = decay_shake(run.shake)
        return self.snapshot()

    # ---------- Per-tick phases ----------

    def _step_active(self):
        """Fixed resolution order; stops at the first terminal event."""
        run = self.run
        avatar = self.avatar

        # 1. Avatar physics
        self.refresh_status(avatar)
        self._update_speed()
        self.integrate(avatar)

        event = self.resolve_bounds(avatar, self._floor_y())
        if event is BoundaryEvent.FLOOR_HIT:
            self._emit(avatar.x, avatar.y, 20, "#f1c40f")
            self._end_run("floor")
            return
        if event is BoundaryEvent.CEILING:
            self._shake(5)
            self._text("BONK!", avatar.x, avatar.y + 40)
        elif event is BoundaryEvent.FLOOR_BOUNCE:
            self._emit(avatar.x, avatar.y + avatar.radius, 10, "cyan")

        # 2. World movement, spawning and despawning
        self._advance_world()

        # 3. Pipes
        for pair in run.pairs:
            if not self.overlaps_pair(avatar, pair):
                continue
            if avatar.invincible:
                pair.neutralized = True
                pair.moving = False
                self._emit(avatar.x, avatar.y, 30, "cyan")
                self._text("SMASH!", avatar.x, avatar.y - 40)
                continue
            self._shake(20)
            self._emit(avatar.x, avatar.y, 50, "red")
            self._end_run("pipe")
            return

        # 4. Power-ups
        kept = []
        for item in run.collectibles:
            if self.overlaps_circle(avatar, item.x, item.y, item.radius):
                self._pick_up(item.kind)
            else:
                kept.append(item)
        run.collectibles = kept

        # 5. Hazards
        kept = []
        for hazard in run.hazards:
            if not self.overlaps_circle(avatar, hazard.x, hazard.y, hazard.size):
                kept.append(hazard)
                continue
            if avatar.invincible:
                run.score += self.config.hazard_bonus
                self._emit(hazard.x, hazard.y, 25, "orange")
                self._text(f"+{self.config.hazard_bonus}", hazard.x, hazard.y - 20)
                log.debug("Destroyed %s hazard", hazard.kind.value)
                continue
            self._shake(20)
            self._emit(avatar.x, avatar.y, 50, "red")
            self._end_run(hazard.kind.value)
            return
        run.hazards = kept

        # 6. Scoring and speed
        self._score_passes()
        self._ramp_speed()
        self._update_speed()

    def _advance_world(self):
        cfg = self.config
        run = self.run
        speed = run.speed

        if self.terrain is not None:
            self.terrain.advance(speed, self.rng)

        run.spawn_counter += 1
        if run.spawn_counter >= spawn_interval(cfg, speed):
            self._spawn_pair()

        low, high = gap_bounds(cfg)
        for pair in run.pairs:
            pair.x -= speed
            oscillate(pair, low, high)
        run.pairs = [p for p in run.pairs if not is_offscreen(p)]

        for item in run.collectibles:
            move_collectible(item, speed, run.frame, cfg.powerup_bob_amplitude)
        run.collectibles = [c for c in run.collectibles if not pickup_offscreen(c.x, c.radius)]

        for hazard in run.hazards:
            move_hazard(hazard, run.frame, self.avatar.y, cfg)
        run.hazards = [h for h in run.hazards if not pickup_offscreen(h.x, h.size)]

        run.particles = update_particles(run.particles)
        run.texts = update_texts(run.texts)

    def _score_passes(self):
        cfg = self.config
        run = self.run
        avatar = self.avatar
        for pair in run.pairs:
            if not has_passed(pair, avatar.x):
                continue
            pair.passed = True
            run.score += 1
            if cfg.effects_enabled:
                phrase = self.rng.choice(PRAISE_PHRASES)
                self._text(phrase, avatar.x, avatar.y - 50)
                self._shake(5)
                self._emit(avatar.x, 0, 30, "gold")
            if cfg.hazards_enabled and self.rng.random() < cfg.hazard_chance:
                self._spawn_hazard()

    def _ramp_speed(self):
        """Speeds up once for every score milestone crossed."""
        cfg = self.config
        run = self.run
        if cfg.speed_ramp_every <= 0:
            return
        while run.score >= run.next_ramp_score:
            run.base_speed += cfg.speed_increment
            run.next_ramp_score += cfg.speed_ramp_every
            log.debug("Speed up to %.2f at score %d", run.base_speed, run.score)

    def _update_speed(self):
        run = self.run
        if self.avatar.effects.is_active(EffectKind.SLOW):
            run.speed = self.config.slow_speed
        else:
            run.speed = run.base_speed

    # ---------- Spawning ----------

    def _spawn_pair(self):
        """Generates a new pipe pair off-screen to the right."""
        cfg = self.config
        rng = self.rng
        run = self.run
        low, high = gap_bounds(cfg)

        moving = rng.random() < cfg.moving_pipe_chance
        pair = make_pair(
            cfg,
            x=cfg.width,
            top_height=rng.uniform(low, high),
            moving=moving,
            move_speed=rng.uniform(cfg.pipe_move_speed_min, cfg.pipe_move_speed_max) if moving else 0.0,
            hue=rng.random() * 360,
        )
        run.pairs.append(pair)
        run.spawn_counter = 0
        log.debug("Spawned pair at top=%.1f moving=%s", pair.top_height, moving)

        if cfg.powerups_enabled and rng.random() < cfg.powerup_chance:
            kind = rng.choice(list(PowerUpKind))
            run.collectibles.append(make_collectible(pair, kind, cfg))
            log.debug("Spawned %s power-up", kind.value)

    def _spawn_hazard(self):
        cfg = self.config
        rng = self.rng
        kind = rng.choice(list(HazardKind))
        top = cfg.hazard_margin
        bottom = max(top, cfg.height - cfg.ground_allowance - cfg.hazard_margin)
        hazard = make_hazard(
            kind,
            x=cfg.width + cfg.hazard_size,
            y=rng.uniform(top, bottom),
            speed=self.run.speed + rng.random() * cfg.hazard_extra_speed,
            config=cfg,
        )
        self.run.hazards.append(hazard)
        log.debug("Spawned %s hazard at y=%.1f", kind.value, hazard.y)

    # ---------- Interactions ----------

    def _flap(self):
        cfg = self.config
        avatar = self.avatar
        glitch = cfg.glitch_chance > 0 and self.rng.random() < cfg.glitch_chance
        self.apply_impulse(avatar, glitch=glitch)
        self._shake(2)
        self._emit(avatar.x, avatar.y, 5, "white")
        if glitch:
            self._text("ZOOM!", avatar.x, avatar.y - 30)

    def _pick_up(self, kind: PowerUpKind):
        avatar = self.avatar
        cleared = apply_power_up(kind, avatar, self.run.pairs, self.config)
        self._text(kind.value.replace("_", " ").upper() + "!", avatar.x, avatar.y - 40)
        log.debug("Picked up %s (cleared %d pairs)", kind.value, cleared)

    def _end_run(self, cause: str):
        run = self.run
        run.status = RunStatus.ENDED
        run.end_cause = cause
        log.info("Run ended by %s with score %d", cause, run.score)

        if run.score > self.best_score:
            self.best_score = run.score
            if self.store is not None:
                self.store.save(run.score)
            log.info("New best score: %d", run.score)

    def _floor_y(self) -> float:
        if self.terrain is not None:
            return self.terrain.surface_y(self.avatar.x)
        return self.config.floor_y

    # ---------- Effects ----------

    def _emit(self, x: float, y: float, count: int, color: Optional[str] = None):
        if self.config.effects_enabled:
            self.run.particles.extend(burst(self.rng, x, y, count, color))

    def _text(self, text: str, x: float, y: float):
        if self.config.effects_enabled:
            self.run.texts.append(floating_text(self.rng, text, x, y))

    def _shake(self, intensity: float):
        if self.config.effects_enabled:
            self.run.shake = intensity

    # ---------- Snapshot ----------

    def snapshot(self) -> FrameSnapshot:
        """Freshly built read-only view; mutating it cannot touch the engine."""
        run = self.run
        terrain = self.terrain.to_client_state() if self.terrain is not None else []
        return FrameSnapshot(
            frame=run.frame,
            status=run.status.value,
            score=run.score,
            best_score=self.best_score,
            speed=round(run.speed, 4),
            shake=round(run.shake, 3),
            avatar=self.avatar.to_client_state(),
            pipes=tuple(p.to_client_state() for p in run.pairs),
            terrain=tuple(terrain),
            collectibles=tuple(c.to_client_state() for c in run.collectibles),
            hazards=tuple(h.to_client_state() for h in run.hazards),
            particles=tuple(p.to_client_state() for p in run.particles),
            texts=tuple(t.to_client_state() for t in run.texts),
        )
