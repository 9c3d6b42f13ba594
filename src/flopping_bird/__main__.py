#!/usr/bin/env python3
"""
Launches the game window: python -m flopping_bird [minimal|chaos|advanced]
"""

import logging
import sys

from .game_client import main

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    main(sys.argv[1] if len(sys.argv) > 1 else "advanced")
