"""Game state model, starting scenarios, content validation and JSON save files for a space strategy game."""

__version__ = "0.1.0"

__all__ = [
    "content_validation",
    "date",
    "game_state",
    "order_codec",
    "orders",
    "scenario",
    "serialization",
]