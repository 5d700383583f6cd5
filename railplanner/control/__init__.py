"""Interaction and simulation drivers.

- TrackLayingStateMachine: place start, propose, commit, cancel
- World: network + trains, advanced once per frame
"""
