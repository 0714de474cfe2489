"""
Wave Tunnel
===========

A single-player reflex game: steer a ball through a procedurally generated
wavy tunnel with scroll, touch or gamepad input. The game ends when the ball
touches a wall.

Tunable parameters live in game_config.yaml.
"""
