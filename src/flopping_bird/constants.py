"""
constants.py: Centralized configuration for the simulation and the window.
All motion values are per tick (one display refresh).
"""

import math

# -------- Timing --------
TICK_RATE = 60                  # Ticks per second driven by the client
TICK_TIME = 1.0 / TICK_RATE

# -------- Game World Config --------
SCREEN_WIDTH = 360
SCREEN_HEIGHT = 640
GROUND_HEIGHT = 20              # Flat floor strip at the bottom
AVATAR_X = 50                   # Fixed avatar X position
AVATAR_RADIUS = 15
RESPAWN_Y = SCREEN_HEIGHT / 2

# -------- Physics Config (pixels / tick) --------
GRAVITY = 0.25
FLAP_STRENGTH = -5.5
FLAP_ROTATION = -0.5
MIN_ROTATION = -0.6             # Upward tilt limit (radians)
ROTATION_UP_STEP = 0.2
ROTATION_DOWN_STEP = 0.1
MAX_ROTATION_CAPPED = math.pi / 2
CEILING_BOUNCE_VELOCITY = 2.0   # Small push down after hitting the top
FLOOR_BOUNCE_VELOCITY = -6.0    # Upward kick when the floor is hit while invincible
GLITCH_CHANCE = 0.1             # "Double jump" glitch
GLITCH_MULTIPLIER = 1.5

# -------- Speed Config --------
BASE_SPEED = 2.5
SPEED_INCREMENT = 0.2
SPEED_RAMP_EVERY = 5            # Score points between speed-ups
SLOW_SPEED = 1.5                # Forced speed while slow-time is active

# -------- Pipe Config --------
PIPE_SPAWN_INTERVAL = 120       # Ticks between pipes at BASE_SPEED
PIPE_WIDTH = 60
PIPE_GAP = 140
PIPE_MIN_HEIGHT = 50
MOVING_PIPE_CHANCE = 0.3
PIPE_MOVE_SPEED_MIN = 1.0
PIPE_MOVE_SPEED_MAX = 3.0

# -------- Terrain Config --------
TERRAIN_SPACING = 40            # Horizontal distance between control points
TERRAIN_MAX_DELTA = 25          # Max height change between neighbours
TERRAIN_MIN_HEIGHT = 20
TERRAIN_MAX_HEIGHT = 100
TERRAIN_START_HEIGHT = 40

# -------- Power-up Config --------
POWERUP_CHANCE = 0.25           # Rolled for every spawned pipe
POWERUP_RADIUS = 10
POWERUP_BOB_AMPLITUDE = 3.0
SHIELD_DURATION = 300
TINY_DURATION = 300
SLOW_DURATION = 240

# -------- Hazard Config --------
HAZARD_CHANCE = 0.2             # Rolled for every passed pipe
HAZARD_SIZE = 12
HAZARD_BONUS = 3
HAZARD_EXTRA_SPEED = 1.5        # Random component added to run speed
HAZARD_MARGIN = 60              # Keep spawns away from ceiling and floor
GHOST_AMPLITUDE = 30.0          # Vertical swing around the spawn height
ROCKET_HOMING_STEP = 1.0

# -------- Effects Config --------
PARTICLE_DECAY = 0.02
TEXT_DECAY = 0.015
TEXT_RISE = -2.0
TEXT_GROWTH = 0.05
SHAKE_DECAY = 0.9
SHAKE_CUTOFF = 0.5
PRAISE_PHRASES = ("NICE!", "WOW!", "EPIC!", "SICK!", "LUCKY!", "FLOP!")
