"""
LifeHub - Source Package

A personal life tracker: money, health, diet, tasks, notes, habits and
reading, held in one snapshot and summarised into the figures a user acts on.

DESIGN PRINCIPLES:
1. One Store, replaced wholesale on every change
2. Every change goes through the Mutator
3. Derived views are pure functions of a snapshot
4. "Now" and identifiers are injected, never ambient
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "LifeHub Team"
