"""
Fightrank - Combat Sports Rankings

Ratings, divisional rankings and championship tracking for regional
MMA, kickboxing, grappling and bare knuckle promotions.

Main components:
- rating: Elo-style rating engine and ranking snapshots
- services: Event publishing, title custody and fight records
- db: SQLAlchemy models and session management
- web: FastAPI JSON API
- tasks: Single-writer locking for recompute runs
"""

__version__ = "1.0.0"
