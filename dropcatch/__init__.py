"""
Drop Catch
==========

A catch-the-falling-drops arcade game. The rule-bearing simulation lives in
dropcatch.core; front ends (see tools/play_human.py) only translate input
events into session calls and draw snapshots.

Tunable parameters are in game_config.yaml next to this file.
"""

import logging

# Package logger
logger = logging.getLogger('dropcatch')

# Don't add handlers here - let the application configure logging
logger.addHandler(logging.NullHandler())
